"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from meatpack import Alphabet, CodecConfig, Unpacker


@pytest.fixture
def scenario_alphabet() -> Alphabet:
    """Alphabet with '0' at index 0 and ' ' at index 1."""
    return Alphabet(symbols=b"0 123456789.\nGX")


@pytest.fixture
def unpacker() -> Unpacker:
    """Unpacker with packing enabled and the default alphabet."""
    return Unpacker(CodecConfig(packing_enabled=True))


@pytest.fixture
def sample_gcode() -> str:
    """Short sliced G-code job with comments."""
    return (
        "; generated by slicer\n"
        "M104 S215 ; set hotend\n"
        "M140 S60\n"
        "G28 ; home all\n"
        "\n"
        "G1 Z0.2 F3000\n"
        "G1 X10.5 Y20.25 E0.8 (prime)\n"
        "G1 X110.5 Y20.25 E4.21\n"
        "M84\n"
    )
