"""Alphabet table for 4-bit character packing.

The table maps 15 frequent byte values to the indices 0-14. Index 15 is never
assigned: a nibble holding 0xF marks an escaped (full-width) character.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator

from ..exceptions import AlphabetError

ALPHABET_SIZE = 15

#: Nibble value signalling "character not packed, literal byte follows"
ESCAPE_NIBBLE = 0xF

#: Byte reserved for the "both characters escaped" marker and the command prefix
COMMAND_BYTE = 0xFF

#: Mask of a packed byte whose first (low) character is escaped
FIRST_NOT_PACKED = 0b00001111

#: Mask of a packed byte whose second (high) character is escaped
SECOND_NOT_PACKED = 0b11110000


class Alphabet(BaseModel):
    """Fixed bijection between 15 byte values and 4-bit indices.

    Example:
        >>> table = Alphabet(symbols="0123456789. \\nGX")
        >>> table.index_of(ord("G"))
        13
        >>> chr(table.char_at(0))
        '0'
        >>> table.index_of(ord("M")) is None
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    symbols: bytes

    _lookup: tuple[int | None, ...] = PrivateAttr(default=())

    @field_validator("symbols", mode="before")
    @classmethod
    def _coerce_symbols(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return value.encode("latin-1")
            except UnicodeEncodeError as e:
                raise AlphabetError(f"Alphabet characters must be 8-bit: {e}") from e
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        return value

    @field_validator("symbols")
    @classmethod
    def _check_symbols(cls, value: bytes) -> bytes:
        if len(value) != ALPHABET_SIZE:
            raise AlphabetError(
                f"Alphabet must have exactly {ALPHABET_SIZE} entries, got {len(value)}"
            )
        if COMMAND_BYTE in value:
            raise AlphabetError("Alphabet must not contain the reserved byte 0xFF")
        if len(set(value)) != len(value):
            duplicates = sorted(b for b, n in Counter(value).items() if n > 1)
            raise AlphabetError(f"Alphabet entries must be distinct, duplicated: {duplicates}")
        return value

    def model_post_init(self, __context: Any) -> None:
        lookup: list[int | None] = [None] * 256
        for index, char in enumerate(self.symbols):
            lookup[char] = index
        self._lookup = tuple(lookup)

    def index_of(self, char: int) -> int | None:
        """Return the 4-bit index of a byte value, or None if it must be escaped."""
        return self._lookup[char]

    def char_at(self, index: int) -> int:
        """Return the byte value stored at a 4-bit index (0-14).

        Raises:
            IndexError: If index is the escape nibble or out of range
        """
        if not 0 <= index < ALPHABET_SIZE:
            raise IndexError(f"Alphabet index must be 0-{ALPHABET_SIZE - 1}, got {index}")
        return self.symbols[index]

    def __contains__(self, char: object) -> bool:
        return isinstance(char, int) and 0 <= char <= 255 and self._lookup[char] is not None

    def __len__(self) -> int:
        return ALPHABET_SIZE

    @classmethod
    def from_corpus(cls, corpus: bytes | str, *, size: int = ALPHABET_SIZE) -> Alphabet:
        """Build a table from the most frequent bytes of a sample stream.

        Ties are broken by byte value so the result is deterministic. The
        reserved 0xFF byte is never selected.

        Args:
            corpus: Representative text (str is encoded as latin-1)
            size: Table size; only the full 15-entry table is supported

        Raises:
            AlphabetError: If the corpus has fewer than 15 distinct usable bytes
        """
        if size != ALPHABET_SIZE:
            raise ValueError(f"size must be {ALPHABET_SIZE}, got {size}")
        if isinstance(corpus, str):
            corpus = corpus.encode("latin-1")

        counts = Counter(b for b in corpus if b != COMMAND_BYTE)
        if len(counts) < size:
            raise AlphabetError(
                f"Corpus has only {len(counts)} distinct bytes, need at least {size}"
            )
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return cls(symbols=bytes(char for char, _ in ranked[:size]))


#: Table derived from histogram analysis of 3D-printing G-code
DEFAULT_ALPHABET = Alphabet(symbols=b"0123456789. \nGX")
