"""In-band command codes.

Commands are sent as two consecutive 0xFF bytes followed by one command code.
Two 0xFF bytes in a row never occur in packed data, because every 0xFF data
byte is followed by a literal character and literals are never 0xFF.
"""

from __future__ import annotations

from enum import IntEnum

from .alphabet import COMMAND_BYTE

COMMAND_PREFIX = bytes((COMMAND_BYTE, COMMAND_BYTE))


class Command(IntEnum):
    """Command codes accepted after the 0xFF 0xFF prefix."""

    TOGGLE_PACKING = 0b11111101
    ENABLE_PACKING = 0b11111011
    DISABLE_PACKING = 0b11111010
    RESET_STATE = 0b11111001
    QUERY_STATE = 0b11111000


def command_sequence(command: Command) -> bytes:
    """Return the wire bytes that invoke a command on the receiving side.

    Example:
        >>> command_sequence(Command.ENABLE_PACKING).hex()
        'fffffb'
    """
    return COMMAND_PREFIX + bytes((Command(command),))


def format_state_report(packing_enabled: bool) -> str:
    """Render the state line a receiver sends back after a command."""
    return "[MP] ON" if packing_enabled else "[MP] OFF"
