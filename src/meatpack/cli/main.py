"""Main CLI entry point for meatpack."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file
from ..codec.decoder import decode
from ..codec.encoder import encode
from ..exceptions import MeatPackError
from ..gcode import minify_text


def main() -> int:
    """Main entry point for the meatpack CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="meatpack: G-code packing codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  meatpack --pack part.gcode -o part.mpk       Pack a file
  meatpack --unpack part.mpk -o part.gcode     Unpack a file
  meatpack --analyze part.gcode                Show packed size estimate
  meatpack --version                           Show version
        """,
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--pack", metavar="FILE", type=str, help="Pack a text file")
    mode.add_argument("--unpack", metavar="FILE", type=str, help="Unpack a packed file")
    mode.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze a text file and show packed size",
    )

    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        type=str,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--strip-comments",
        action="store_true",
        help="Remove G-code comments and blank lines before packing",
    )
    parser.add_argument(
        "--pad",
        metavar="CHAR",
        type=str,
        help="Pad an odd trailing character with CHAR instead of sending it unpacked",
    )
    parser.add_argument(
        "--unpacked-start",
        action="store_true",
        help="When unpacking, start with packing disabled until a command enables it",
    )
    parser.add_argument(
        "--baudrate",
        type=int,
        default=115200,
        help="Serial baud rate for --analyze estimates (default: 115200)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"meatpack {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.pack or args.unpack or args.analyze
    if source is None:
        parser.print_help()
        return 0

    file_path = Path(source)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        return 1

    pad: int | None = None
    if args.pad is not None:
        if len(args.pad) != 1:
            print(f"Error: --pad takes a single character, got {args.pad!r}", file=sys.stderr)
            return 2
        pad = ord(args.pad)

    try:
        if args.analyze:
            analyze_file(file_path, strip_comments=args.strip_comments, baudrate=args.baudrate)
            return 0

        data = file_path.read_bytes()
        if args.pack:
            if args.strip_comments:
                data = minify_text(data.decode("latin-1")).encode("latin-1")
            result = encode(data, pad=pad)
        else:
            result = decode(data, packing_enabled=not args.unpacked_start)
    except (MeatPackError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        Path(args.output).write_bytes(result)
    else:
        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
