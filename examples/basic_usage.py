#!/usr/bin/env python3
"""Basic usage example for meatpack.

This example demonstrates:
1. Stripping comments from a G-code job
2. Estimating the packed size
3. Enabling packing on a receiver over the wire
4. Decoding one byte at a time, as a serial interrupt would
"""

from __future__ import annotations

from meatpack import (
    Command,
    Unpacker,
    command_sequence,
    compression_ratio,
    encode,
    minify_text,
    packed_size,
)

JOB = """\
; sliced part
M104 S215 ; hotend
G28 ; home
G1 Z0.2 F3000
G1 X10.5 Y20.25 E0.8
G1 X110.5 Y20.25 E4.21
M84
"""


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("meatpack Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Stripping comments...")
    text = minify_text(JOB)
    print(f"   Original: {len(JOB)} bytes")
    print(f"   Stripped: {len(text)} bytes")
    print()

    print("2. Estimating packed size...")
    print(f"   Packed: {packed_size(text)} bytes")
    print(f"   Ratio: {compression_ratio(text):.2f}x")
    print()

    print("3. Packing and sending to a receiver...")
    wire = command_sequence(Command.ENABLE_PACKING) + encode(text)
    print(f"   Wire bytes: {len(wire)}")
    print(f"   First bytes: {wire[:12].hex(' ')}")
    print()

    print("4. Receiving one byte at a time...")
    reports: list[bool] = []
    unpacker = Unpacker(on_state_report=reports.append)
    received = bytearray()
    for raw in wire:
        received += unpacker.handle_byte(raw)

    print(f"   Packing enabled by sender: {reports}")
    print(f"   Round trip OK: {bytes(received) == text.encode('ascii')}")
    print()
    print(received.decode("ascii"), end="")


if __name__ == "__main__":
    main()
