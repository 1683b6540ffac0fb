"""G-code preprocessing ahead of packing.

Comments and blank lines make up a large share of sliced G-code and carry
nothing the machine needs. Removing them before packing roughly halves the
stream again on top of the 4-bit packing.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

_PAREN_COMMENT = re.compile(r"\([^)]*\)")


def strip_comment(line: str) -> str:
    """Remove ';' and parenthesized comments and surrounding whitespace.

    Example:
        >>> strip_comment("G1 X10 (move) Y5 ; fast")
        'G1 X10  Y5'
    """
    line = line.split(";", 1)[0]
    line = _PAREN_COMMENT.sub("", line)
    return line.strip()


def minify(lines: Iterable[str] | str) -> Iterator[str]:
    """Yield stripped, non-empty lines terminated by a single newline.

    Args:
        lines: Text or iterable of lines (line endings are ignored)
    """
    if isinstance(lines, str):
        lines = lines.splitlines()
    for line in lines:
        stripped = strip_comment(line)
        if stripped:
            yield stripped + "\n"


def minify_text(text: str) -> str:
    """Return text with comments and blank lines removed."""
    return "".join(minify(text))
