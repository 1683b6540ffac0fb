"""Byte-at-a-time unpacker and in-band command channel.

This module provides the Unpacker, which is fed one received byte per call and
returns the 0, 1 or 2 characters that byte completes, and the decode() helper
that runs a fresh Unpacker over a complete stream.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from ..config import CodecConfig
from ..exceptions import DecodeError, ProtocolError
from .alphabet import COMMAND_BYTE, DEFAULT_ALPHABET, ESCAPE_NIBBLE, Alphabet
from .commands import Command

logger = logging.getLogger(__name__)

StateReportCallback = Callable[[bool], None]


class DecodeState(Enum):
    """Position of the unpacker within a packed pair."""

    IDLE = "idle"
    AWAIT_LITERAL_1 = "await_literal_1"
    AWAIT_LITERAL_1_THEN_BUFFERED_2 = "await_literal_1_then_buffered_2"
    AWAIT_LITERAL_2 = "await_literal_2"
    AWAIT_COMMAND_BYTE = "await_command_byte"


class Unpacker:
    """Streaming decoder for packed bytes with in-band commands.

    A 0xFF byte is never acted on when it arrives. If the next byte is also
    0xFF the pair is a command prefix and the first non-0xFF byte after it is
    a command code.
    Otherwise the held 0xFF is decoded as data ("both characters escaped")
    immediately before the new byte. This lookahead runs in every state, so a
    command is recognized wherever it lands in the stream.

    Attributes:
        config: Session configuration (packing flag, strictness)
        alphabet: Table used to expand 4-bit indices
        fault_count: Number of desynchronizations seen so far

    Example:
        >>> unpacker = Unpacker(CodecConfig(packing_enabled=True))
        >>> unpacker.handle_byte(0xBD)  # 'G' then ' '
        b'G '
        >>> unpacker.handle_byte(0x0F)  # 'M' escaped, then '0'
        b''
        >>> unpacker.handle_byte(ord("M"))
        b'M0'
    """

    def __init__(
        self,
        config: CodecConfig | None = None,
        alphabet: Alphabet | None = None,
        *,
        on_state_report: StateReportCallback | None = None,
    ) -> None:
        self.config = config if config is not None else CodecConfig()
        self.alphabet = alphabet if alphabet is not None else DEFAULT_ALPHABET
        self.fault_count = 0
        self._report_callbacks: list[StateReportCallback] = []
        if on_state_report is not None:
            self._report_callbacks.append(on_state_report)

        self._state = DecodeState.IDLE
        self._buffered: int | None = None
        self._prefix_pending = False

    @property
    def state(self) -> DecodeState:
        return self._state

    @property
    def buffered(self) -> int | None:
        """Second character decoded ahead of its escaped first character."""
        return self._buffered

    @property
    def prefix_pending(self) -> bool:
        """True after a single 0xFF whose meaning is not yet known."""
        return self._prefix_pending

    @property
    def is_idle(self) -> bool:
        """True when no partial pair, buffered character or prefix is pending."""
        return self._state is DecodeState.IDLE and not self._prefix_pending

    @property
    def packing_enabled(self) -> bool:
        return self.config.packing_enabled

    def attach_state_report_callback(self, callback: StateReportCallback) -> None:
        """Register a callback invoked with the packing flag after every command.

        The codec does not produce a reply itself; whoever owns the return
        channel (usually the transport) attaches here.
        """
        self._report_callbacks.append(callback)

    def handle_byte(self, raw: int) -> bytes:
        """Process one received byte.

        Args:
            raw: Received byte value (0-255)

        Returns:
            Zero, one or two decoded characters

        Raises:
            ValueError: If raw is not a byte value
            ProtocolError: On desynchronization in strict mode
        """
        if not 0 <= raw <= 255:
            raise ValueError(f"raw must be a byte value 0-255, got {raw}")

        if self._state is DecodeState.AWAIT_COMMAND_BYTE:
            # 0xFF is never a command code; a run of them keeps the prefix open
            if raw == COMMAND_BYTE:
                return b""
            self._state = DecodeState.IDLE
            self._execute(raw)
            return b""

        if raw == COMMAND_BYTE:
            if self._prefix_pending:
                self._prefix_pending = False
                self._state = DecodeState.AWAIT_COMMAND_BYTE
                self._buffered = None
            else:
                self._prefix_pending = True
            return b""

        if self._prefix_pending:
            self._prefix_pending = False
            return self._decode(COMMAND_BYTE) + self._decode(raw)

        return self._decode(raw)

    def feed(self, data: bytes) -> bytes:
        """Process a run of received bytes and return everything they decode to."""
        out = bytearray()
        for raw in data:
            out += self.handle_byte(raw)
        return bytes(out)

    def reset_state(self) -> None:
        """Drop any partial pair, buffered character and pending prefix."""
        self._state = DecodeState.IDLE
        self._buffered = None
        self._prefix_pending = False

    def trigger(self, command: Command) -> None:
        """Apply a command locally, exactly as if it had arrived on the wire."""
        self._apply(Command(command))

    def _decode(self, raw: int) -> bytes:
        if not self.config.packing_enabled:
            return bytes((raw,))

        state = self._state
        if state is DecodeState.IDLE:
            return self._decode_packed(raw)

        if raw == COMMAND_BYTE:
            return self._fault(f"literal 0xFF received in state {state.value}")

        if state is DecodeState.AWAIT_LITERAL_1:
            self._state = DecodeState.AWAIT_LITERAL_2
            return bytes((raw,))

        if state is DecodeState.AWAIT_LITERAL_2:
            self._state = DecodeState.IDLE
            return bytes((raw,))

        # AWAIT_LITERAL_1_THEN_BUFFERED_2
        second = self._buffered
        self._state = DecodeState.IDLE
        self._buffered = None
        return bytes((raw, second))

    def _decode_packed(self, raw: int) -> bytes:
        low = raw & 0x0F
        high = (raw >> 4) & 0x0F

        if low == ESCAPE_NIBBLE and high == ESCAPE_NIBBLE:
            self._state = DecodeState.AWAIT_LITERAL_1
            return b""

        if low == ESCAPE_NIBBLE:
            # Output order is first then second; hold the second back
            self._buffered = self.alphabet.char_at(high)
            self._state = DecodeState.AWAIT_LITERAL_1_THEN_BUFFERED_2
            return b""

        first = self.alphabet.char_at(low)
        if high == ESCAPE_NIBBLE:
            self._state = DecodeState.AWAIT_LITERAL_2
            return bytes((first,))

        return bytes((first, self.alphabet.char_at(high)))

    def _execute(self, code: int) -> None:
        try:
            command = Command(code)
        except ValueError:
            self._fault(f"unknown command code 0x{code:02X}")
            return
        self._apply(command)

    def _apply(self, command: Command) -> None:
        logger.debug("Command %s", command.name)

        if command is Command.ENABLE_PACKING:
            self._set_packing(True)
        elif command is Command.DISABLE_PACKING:
            self._set_packing(False)
        elif command is Command.TOGGLE_PACKING:
            self._set_packing(not self.config.packing_enabled)
        elif command is Command.RESET_STATE:
            self.reset_state()

        self._report_state()

    def _set_packing(self, enabled: bool) -> None:
        if self.config.packing_enabled == enabled:
            return
        self.config.packing_enabled = enabled
        self.reset_state()
        logger.debug("Packing %s", "enabled" if enabled else "disabled")

    def _report_state(self) -> None:
        if not self._report_callbacks:
            logger.debug("No state report path attached (packing=%s)", self.packing_enabled)
            return
        for callback in self._report_callbacks:
            callback(self.config.packing_enabled)

    def _fault(self, reason: str) -> bytes:
        self.reset_state()
        self.fault_count += 1
        logger.warning("Protocol desynchronization: %s; state reset", reason)
        if self.config.strict:
            raise ProtocolError(f"Protocol desynchronization: {reason}")
        return b""


def decode(
    data: bytes,
    *,
    alphabet: Alphabet | None = None,
    packing_enabled: bool = True,
) -> bytes:
    """Decode a complete packed stream.

    Args:
        data: Received bytes, including any in-band commands
        alphabet: Table the sender packed with (default table if None)
        packing_enabled: Initial packing state of the receiver

    Returns:
        Decoded characters

    Raises:
        ProtocolError: If the stream desynchronizes
        DecodeError: If the stream ends in the middle of a pair or command

    Example:
        >>> from meatpack import encode, decode
        >>> decode(encode(b"G1 X10.5\\n"))
        b'G1 X10.5\\n'
    """
    unpacker = Unpacker(CodecConfig(packing_enabled=packing_enabled), alphabet)
    out = unpacker.feed(data)

    if not unpacker.is_idle:
        state = "pending 0xFF" if unpacker.prefix_pending else unpacker.state.value
        raise DecodeError(f"Truncated stream: ended with decoder in state {state}")

    return out
