"""Packing codec for meatpack.

This module provides the alphabet table, the streaming Packer and Unpacker,
and the in-band command codes they share.
"""

from __future__ import annotations

from .alphabet import COMMAND_BYTE, DEFAULT_ALPHABET, ESCAPE_NIBBLE, Alphabet
from .commands import COMMAND_PREFIX, Command, command_sequence, format_state_report
from .decoder import DecodeState, Unpacker, decode
from .encoder import Packer, encode

__all__ = [
    "encode",
    "decode",
    "Packer",
    "Unpacker",
    "DecodeState",
    "Alphabet",
    "DEFAULT_ALPHABET",
    "ESCAPE_NIBBLE",
    "COMMAND_BYTE",
    "COMMAND_PREFIX",
    "Command",
    "command_sequence",
    "format_state_report",
]
