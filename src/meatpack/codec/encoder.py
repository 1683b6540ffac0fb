"""Streaming packer.

This module provides the Packer, which pairs consecutive characters into
single bytes of two 4-bit alphabet indices, and the encode() helper.
"""

from __future__ import annotations

from ..exceptions import EncodeError
from .alphabet import (
    COMMAND_BYTE,
    DEFAULT_ALPHABET,
    FIRST_NOT_PACKED,
    SECOND_NOT_PACKED,
    Alphabet,
)
from .commands import Command, command_sequence


def _to_bytes(data: bytes | bytearray | str) -> bytes:
    if isinstance(data, str):
        try:
            return data.encode("latin-1")
        except UnicodeEncodeError as e:
            raise EncodeError(f"Text contains characters outside the 8-bit range: {e}") from e
    return bytes(data)


class Packer:
    """Packs a character stream two characters per byte.

    Characters are paired in arrival order, so push() returns nothing for the
    first character of a pair and the packed bytes for the second. A trailing
    unpaired character is only written by flush().

    By default flush() sends the lone character unpacked, wrapped in disable
    and enable packing commands, which is lossless and leaves the receiver in
    packed mode. With a pad byte the character is paired with the pad instead,
    which is shorter but adds the pad to the decoded text.

    Example:
        >>> packer = Packer()
        >>> packer.feed(b"G1")
        b'\\x1d'
        >>> packer.push(ord("M"))
        b''
        >>> packer.flush()
        b'\\xff\\xff\\xfaM\\xff\\xff\\xfb'
    """

    def __init__(self, alphabet: Alphabet | None = None, *, pad: int | None = None) -> None:
        """Initialize a packer.

        Args:
            alphabet: Table to pack with (default table if None)
            pad: Byte used to complete an odd trailing character, or None for
                the lossless command-wrapped tail

        Raises:
            ValueError: If pad is not a byte value or is 0xFF
        """
        if pad is not None and not 0 <= pad < COMMAND_BYTE:
            raise ValueError(f"pad must be a byte value 0-254, got {pad}")
        self.alphabet = alphabet if alphabet is not None else DEFAULT_ALPHABET
        self.pad = pad
        self._pending: int | None = None

    @property
    def pending(self) -> int | None:
        """First character of a pair still waiting for its partner."""
        return self._pending

    def push(self, char: int) -> bytes:
        """Add one character.

        Returns:
            The packed bytes for a completed pair, or b"" while one is open

        Raises:
            EncodeError: If char is 0xFF or not a byte value
        """
        if not 0 <= char <= 255:
            raise EncodeError(f"Character must be a byte value 0-255, got {char}")
        if char == COMMAND_BYTE:
            raise EncodeError("Byte 0xFF is reserved and cannot be packed")

        if self._pending is None:
            self._pending = char
            return b""

        first = self._pending
        self._pending = None
        return self.pack_pair(first, char)

    def feed(self, data: bytes | bytearray | str) -> bytes:
        """Add a run of characters and return all completed pairs."""
        out = bytearray()
        for char in _to_bytes(data):
            out += self.push(char)
        return bytes(out)

    def flush(self) -> bytes:
        """Write out a trailing unpaired character, if any."""
        if self._pending is None:
            return b""

        char = self._pending
        self._pending = None
        if self.pad is not None:
            return self.pack_pair(char, self.pad)

        return (
            command_sequence(Command.DISABLE_PACKING)
            + bytes((char,))
            + command_sequence(Command.ENABLE_PACKING)
        )

    def pack_pair(self, first: int, second: int) -> bytes:
        """Pack two characters into one byte plus a literal per escaped character."""
        index1 = self.alphabet.index_of(first)
        index2 = self.alphabet.index_of(second)

        if index1 is None and index2 is None:
            return bytes((COMMAND_BYTE, first, second))
        if index1 is None:
            return bytes(((index2 << 4) | FIRST_NOT_PACKED, first))
        if index2 is None:
            return bytes((SECOND_NOT_PACKED | index1, second))
        return bytes(((index2 << 4) | index1,))


def encode(
    data: bytes | bytearray | str,
    *,
    alphabet: Alphabet | None = None,
    pad: int | None = None,
) -> bytes:
    """Pack a complete character stream.

    The receiver must have packing enabled before these bytes arrive.

    Args:
        data: Text to pack (str is encoded as latin-1)
        alphabet: Table to pack with (default table if None)
        pad: Pad byte for an odd-length tail, or None for the lossless tail

    Returns:
        Packed bytes

    Raises:
        EncodeError: If data contains 0xFF or non-8-bit characters

    Example:
        >>> encode("G28\\n").hex()
        '2dc8'
    """
    packer = Packer(alphabet, pad=pad)
    return packer.feed(data) + packer.flush()
