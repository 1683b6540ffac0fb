"""meatpack: 4-bit packing codec for machine-tool command text

A Python implementation of MeatPack-style compression for G-code streams. Most
G-code can be written with a 15-character alphabet, so two characters fit in
one byte as a pair of 4-bit indices. Characters outside the alphabet are
escaped and sent full-width, and an in-band command channel on the same byte
stream switches packing on and off.

Key Features:
- Byte-at-a-time Unpacker suited to serial receive loops
- Streaming Packer with a lossless odd-length tail
- In-band commands (enable, disable, toggle, reset, query)
- Pydantic-validated alphabet tables, including building one from a corpus

Quick Start:
    >>> from meatpack import Command, Unpacker, command_sequence, encode
    >>>
    >>> unpacker = Unpacker()
    >>> unpacker.feed(command_sequence(Command.ENABLE_PACKING))
    b''
    >>> unpacker.feed(encode("G1 X10.5 Y3\\n"))
    b'G1 X10.5 Y3\\n'
"""

from __future__ import annotations

from .codec import (
    COMMAND_BYTE,
    COMMAND_PREFIX,
    DEFAULT_ALPHABET,
    ESCAPE_NIBBLE,
    Alphabet,
    Command,
    DecodeState,
    Packer,
    Unpacker,
    command_sequence,
    decode,
    encode,
    format_state_report,
)
from .config import CodecConfig
from .exceptions import (
    AlphabetError,
    DecodeError,
    EncodeError,
    MeatPackError,
    ProtocolError,
)
from .gcode import minify, minify_text, strip_comment
from .utils import alphabet_coverage, compression_ratio, packed_size, transmission_time

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "Packer",
    "Unpacker",
    "DecodeState",
    "CodecConfig",
    # Alphabet
    "Alphabet",
    "DEFAULT_ALPHABET",
    "ESCAPE_NIBBLE",
    # Commands
    "Command",
    "COMMAND_BYTE",
    "COMMAND_PREFIX",
    "command_sequence",
    "format_state_report",
    # Exceptions
    "MeatPackError",
    "AlphabetError",
    "EncodeError",
    "DecodeError",
    "ProtocolError",
    # G-code
    "strip_comment",
    "minify",
    "minify_text",
    # Sizing
    "packed_size",
    "alphabet_coverage",
    "compression_ratio",
    "transmission_time",
    # Version
    "__version__",
]
