"""In-process loopback transport.

This module provides LoopbackTransport, which delivers everything written to
it to a receiving Unpacker. It stands in for a serial line to a controller:

- Written bytes are queued like a UART receive buffer
- poll() drains the queue one byte per handle_byte() call
- State reports after commands are queued as "[MP] ON" / "[MP] OFF" lines
"""

from __future__ import annotations

import logging
from queue import Empty, Queue
from typing import Callable

from ..codec.alphabet import Alphabet
from ..codec.commands import format_state_report
from ..codec.decoder import Unpacker
from ..config import CodecConfig
from .driver import Transport

logger = logging.getLogger(__name__)


class LoopbackTransport(Transport):
    """Loopback link ending in an Unpacker.

    Nothing is decoded until poll() is called, so tests control exactly when
    bytes arrive on the receiving side.

    Attributes:
        unpacker: Receiving decoder (owns the receiver's packing state)
        rx_queue: Bytes written but not yet processed
        rx_callbacks: Callbacks receiving decoded text
        responses: State report lines not yet read

    Examples:
        ```python
        from meatpack import Command, command_sequence, encode
        from meatpack.transport import LoopbackTransport

        link = LoopbackTransport()
        link.connect("loop://")
        link.write(command_sequence(Command.ENABLE_PACKING))
        link.write(encode("G28\\n"))
        assert link.poll() == b"G28\\n"
        assert link.read_responses() == ["[MP] ON"]
        ```
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        alphabet: Alphabet | None = None,
        *,
        max_write_size: int | None = None,
    ) -> None:
        """Initialize a loopback link.

        Args:
            config: Receiver configuration. If None, packing starts disabled.
            alphabet: Table shared with the sender
            max_write_size: Largest accepted write() in bytes, or None for no limit
        """
        if max_write_size is not None and max_write_size <= 0:
            raise ValueError(f"max_write_size must be > 0, got {max_write_size}")

        self.unpacker = Unpacker(config, alphabet, on_state_report=self._on_state_report)
        self.max_write_size = max_write_size
        self.rx_queue: Queue[int] = Queue()
        self.rx_callbacks: list[Callable[[bytes], None]] = []
        self.responses: list[str] = []
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def connect(self, port: str = "loop://", baudrate: int = 115200) -> None:
        if self._connected:
            logger.debug("Loopback already connected")
            return
        logger.info("Loopback connected to %s @ %d baud", port, baudrate)
        self._connected = True

    def write(self, data: bytes) -> None:
        """Queue bytes for the receiving side.

        Raises:
            RuntimeError: If not connected
            ValueError: If data exceeds max_write_size
        """
        if not self._connected:
            raise RuntimeError("Loopback not connected. Call connect() before write().")

        if self.max_write_size is not None and len(data) > self.max_write_size:
            raise ValueError(
                f"Write of {len(data)} bytes exceeds max_write_size ({self.max_write_size} bytes)"
            )

        for raw in data:
            self.rx_queue.put(raw)

    def attach_rx_callback(self, callback: Callable[[bytes], None]) -> None:
        self.rx_callbacks.append(callback)

    def poll(self) -> bytes:
        """Feed every queued byte to the unpacker.

        Returns:
            All text decoded during this call (also passed to RX callbacks)

        Raises:
            ProtocolError: If the receiver desynchronizes in strict mode. Text
                decoded before the offending byte still reaches the RX
                callbacks, and bytes after it stay queued.
        """
        decoded = bytearray()
        try:
            while True:
                try:
                    raw = self.rx_queue.get_nowait()
                except Empty:
                    break
                decoded += self.unpacker.handle_byte(raw)
        finally:
            if decoded:
                for callback in self.rx_callbacks:
                    callback(bytes(decoded))
        return bytes(decoded)

    def read_responses(self) -> list[str]:
        """Return and clear the state report lines sent back by the receiver.

        Every command produces a line, including the disable/enable pair a
        Packer wraps around an unpadded odd-length tail. Such a tail adds
        "[MP] OFF" and "[MP] ON" lines the sender did not ask for.
        """
        responses, self.responses = self.responses, []
        return responses

    def disconnect(self) -> None:
        if not self._connected:
            return
        logger.info("Loopback disconnected (%d bytes unprocessed)", self.rx_queue.qsize())
        self._connected = False

    def _on_state_report(self, packing_enabled: bool) -> None:
        self.responses.append(format_state_report(packing_enabled))
