"""Packed size calculation utilities.

This module provides functions to calculate the packed size of a stream
without actually packing it.
"""

from __future__ import annotations

from ..codec.alphabet import DEFAULT_ALPHABET, Alphabet
from ..codec.commands import COMMAND_PREFIX

#: Start bit + 8 data bits + stop bit
SERIAL_BITS_PER_BYTE = 10

# Disable command, the literal, enable command
_UNPACKED_TAIL_BYTES = 2 * (len(COMMAND_PREFIX) + 1) + 1


def _as_bytes(data: bytes | str) -> bytes:
    return data.encode("latin-1") if isinstance(data, str) else bytes(data)


def packed_size(data: bytes | str, alphabet: Alphabet | None = None, *, pad: int | None = None) -> int:
    """Calculate the exact size of encode(data) in bytes.

    Every pair costs one byte plus one byte per character outside the table.
    An odd trailing character costs a pair when a pad byte is used, or the
    command-wrapped literal otherwise.

    Args:
        data: Text to measure (str is encoded as latin-1)
        alphabet: Table to measure against (default table if None)
        pad: Pad byte, as passed to encode()

    Returns:
        Size in bytes

    Example:
        >>> packed_size(b"G1 X5\\n")
        3
        >>> packed_size(b"M84\\n")
        3
    """
    table = alphabet if alphabet is not None else DEFAULT_ALPHABET
    raw = _as_bytes(data)

    even = len(raw) - (len(raw) % 2)
    size = even // 2 + sum(1 for char in raw[:even] if char not in table)

    if even < len(raw):
        if pad is None:
            size += _UNPACKED_TAIL_BYTES
        else:
            size += 1 + (raw[-1] not in table) + (pad not in table)

    return size


def alphabet_coverage(data: bytes | str, alphabet: Alphabet | None = None) -> float:
    """Return the fraction of characters that pack into a nibble (0.0-1.0)."""
    table = alphabet if alphabet is not None else DEFAULT_ALPHABET
    raw = _as_bytes(data)
    if not raw:
        return 1.0
    return sum(1 for char in raw if char in table) / len(raw)


def compression_ratio(
    data: bytes | str, alphabet: Alphabet | None = None, *, pad: int | None = None
) -> float:
    """Return original size divided by packed size (2.0 is the best case)."""
    size = packed_size(data, alphabet, pad=pad)
    if size == 0:
        return 1.0
    return len(_as_bytes(data)) / size


def transmission_time(num_bytes: int, baudrate: int = 115200) -> float:
    """Estimate seconds needed to send num_bytes over an 8N1 serial line."""
    if baudrate <= 0:
        raise ValueError(f"baudrate must be > 0, got {baudrate}")
    return num_bytes * SERIAL_BITS_PER_BYTE / baudrate
