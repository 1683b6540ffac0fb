"""Exception hierarchy for meatpack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from MeatPackError for easy catching of any meatpack-specific error.
"""

from __future__ import annotations


class MeatPackError(Exception):
    """Base exception for all meatpack errors."""

    pass


class AlphabetError(MeatPackError):
    """Raised when an alphabet table is invalid.

    Examples:
        - Table does not hold exactly 15 entries
        - Duplicate entries
        - Table contains the reserved 0xFF byte
        - Corpus too small to build a table from
    """

    pass


class EncodeError(MeatPackError):
    """Raised when packing input fails.

    Examples:
        - Input contains the reserved 0xFF byte
        - Character outside the 8-bit range
    """

    pass


class DecodeError(MeatPackError):
    """Raised when unpacking a complete stream fails.

    Examples:
        - Stream ends while a literal byte is still expected
        - Stream ends in the middle of a command sequence
    """

    pass


class ProtocolError(DecodeError):
    """Raised when the unpacker loses synchronization with the sender.

    The unpacker has already reset itself to the idle state when this is raised.

    Examples:
        - Unknown command code after a 0xFF 0xFF prefix
        - Literal 0xFF where an escaped character was expected
    """

    pass
