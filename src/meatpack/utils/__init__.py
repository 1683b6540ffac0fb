"""Utility functions for meatpack."""

from __future__ import annotations

from .stats import alphabet_coverage, compression_ratio, packed_size, transmission_time

__all__ = [
    "packed_size",
    "alphabet_coverage",
    "compression_ratio",
    "transmission_time",
]
