"""Host-side writer that packs text onto a transport."""

from __future__ import annotations

import logging

from ..codec.alphabet import COMMAND_BYTE, Alphabet
from ..codec.commands import Command, command_sequence
from ..codec.encoder import Packer
from ..exceptions import EncodeError
from ..gcode import minify_text
from .driver import Transport

logger = logging.getLogger(__name__)


class PackedSender:
    """Sends text over a transport, packed or plain, and drives the receiver's mode.

    The sender tracks the packing state it has commanded, so it must be the
    only writer on the transport. A pair left open by send() is carried into
    the next send(); call flush() at the end of a job.

    Example:
        ```python
        link = LoopbackTransport()
        link.connect("loop://")
        sender = PackedSender(link, strip_comments=True)
        sender.enable_packing()
        sender.send("G28 ; home\\nG1 X10\\n")
        sender.flush()
        link.poll()  # b"G28\\nG1 X10\\n"
        ```
    """

    def __init__(
        self,
        transport: Transport,
        alphabet: Alphabet | None = None,
        *,
        pad: int | None = None,
        strip_comments: bool = False,
    ) -> None:
        self.transport = transport
        self.packer = Packer(alphabet, pad=pad)
        self.strip_comments = strip_comments
        self.packing_enabled = False

    def send(self, text: bytes | str) -> None:
        """Write text, packed if packing is currently enabled.

        Raises:
            EncodeError: If text contains 0xFF
        """
        if self.strip_comments:
            if isinstance(text, bytes):
                text = text.decode("latin-1")
            text = minify_text(text)

        if self.packing_enabled:
            self._write(self.packer.feed(text))
            return

        data = text.encode("latin-1") if isinstance(text, str) else bytes(text)
        if COMMAND_BYTE in data:
            raise EncodeError("Byte 0xFF is reserved and cannot be sent")
        self._write(data)

    def flush(self) -> None:
        """Write out a trailing unpaired character.

        Without a pad byte the character is sent unpacked between disable and
        enable commands, so the receiver emits two extra state reports
        ("[MP] OFF" then "[MP] ON"). Set pad to avoid them.
        """
        self._write(self.packer.flush())

    def send_command(self, command: Command) -> None:
        """Send a command, closing any open pair first."""
        command = Command(command)
        self.flush()
        self._write(command_sequence(command))

        if command is Command.ENABLE_PACKING:
            self.packing_enabled = True
        elif command is Command.DISABLE_PACKING:
            self.packing_enabled = False
        elif command is Command.TOGGLE_PACKING:
            self.packing_enabled = not self.packing_enabled
        logger.debug("Sent %s (packing=%s)", command.name, self.packing_enabled)

    def enable_packing(self) -> None:
        self.send_command(Command.ENABLE_PACKING)

    def disable_packing(self) -> None:
        self.send_command(Command.DISABLE_PACKING)

    def query_state(self) -> None:
        self.send_command(Command.QUERY_STATE)

    def reset_remote(self) -> None:
        """Ask the receiver to drop any partial decode state."""
        self.send_command(Command.RESET_STATE)

    def _write(self, data: bytes) -> None:
        if data:
            self.transport.write(data)
