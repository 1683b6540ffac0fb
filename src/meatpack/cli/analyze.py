"""Packing analysis CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.alphabet import DEFAULT_ALPHABET, Alphabet
from ..gcode import minify_text
from ..utils.stats import alphabet_coverage, packed_size, transmission_time


def analyze_file(
    file_path: Path,
    *,
    alphabet: Alphabet | None = None,
    strip_comments: bool = False,
    baudrate: int = 115200,
) -> None:
    """Print how well a G-code file packs.

    Args:
        file_path: Path to a text file
        alphabet: Table to measure against (default table if None)
        strip_comments: Measure after comment and blank-line removal too
        baudrate: Serial rate for transmission time estimates
    """
    table = alphabet if alphabet is not None else DEFAULT_ALPHABET
    raw = file_path.read_bytes()

    print("|" * 7, "meatpack: G-code packing codec", "|" * 7)
    print(f"File: {file_path}")
    print()

    _print_row("Original size", f"{len(raw)} bytes")
    text = raw
    if strip_comments:
        text = minify_text(raw.decode("latin-1")).encode("latin-1")
        _print_row("After comment strip", f"{len(text)} bytes")

    size = packed_size(text, table)
    _print_row("Alphabet coverage", f"{alphabet_coverage(text, table):.1%}")
    _print_row("Packed size", f"{size} bytes")
    ratio = len(raw) / size if size else 1.0
    _print_row("Compression ratio", f"{ratio:.2f}x")
    print()

    print(f"{'=' * 16} Transmission @ {baudrate} baud {'=' * 16}")
    _print_row("Unpacked", f"{transmission_time(len(raw), baudrate):.2f} seconds")
    _print_row("Packed", f"{transmission_time(size, baudrate):.2f} seconds")
    print()


def _print_row(label: str, value: str) -> None:
    dots = "." * max(1, 30 - len(label))
    print(f"        {label}{dots}{value}")
