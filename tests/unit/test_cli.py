"""Tests for CLI tool."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from meatpack import decode, encode


def _run(*args: str) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(
        [sys.executable, "-m", "meatpack.cli.main", *args],
        capture_output=True,
    )


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = _run("--help")
    assert result.returncode == 0
    assert b"meatpack: G-code packing codec" in result.stdout
    assert b"--pack" in result.stdout
    assert b"--analyze" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = _run("--version")
    assert result.returncode == 0
    assert b"meatpack 0.1.0" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = _run()
    assert result.returncode == 0
    assert b"meatpack: G-code packing codec" in result.stdout


def test_cli_pack_unpack(tmp_path: Path, sample_gcode: str) -> None:
    """Test packing a file and unpacking it again."""
    source = tmp_path / "part.gcode"
    packed = tmp_path / "part.mpk"
    restored = tmp_path / "restored.gcode"
    source.write_text(sample_gcode)

    assert _run("--pack", str(source), "-o", str(packed)).returncode == 0
    assert packed.read_bytes() == encode(source.read_bytes())

    assert _run("--unpack", str(packed), "-o", str(restored)).returncode == 0
    assert restored.read_bytes() == source.read_bytes()


def test_cli_pack_to_stdout(tmp_path: Path) -> None:
    """Test that packed output goes to stdout without -o."""
    source = tmp_path / "home.gcode"
    source.write_bytes(b"G28\n")

    result = _run("--pack", str(source))
    assert result.returncode == 0
    assert result.stdout == bytes([0x2D, 0xC8])


def test_cli_pack_strip_comments_and_pad(tmp_path: Path) -> None:
    """Test comment stripping and padding options."""
    source = tmp_path / "part.gcode"
    source.write_bytes(b"G28 ; home\nM84 ; motors off\nG1\n")
    packed = tmp_path / "part.mpk"

    result = _run("--pack", str(source), "--strip-comments", "--pad", " ", "-o", str(packed))
    assert result.returncode == 0
    assert decode(packed.read_bytes()) == b"G28\nM84\nG1\n "


def test_cli_unpack_unpacked_start(tmp_path: Path) -> None:
    """Test unpacking a stream that starts in plain mode."""
    source = tmp_path / "stream.bin"
    source.write_bytes(b"M84\n\xff\xff\xfb" + encode("G28\n"))

    result = _run("--unpack", str(source), "--unpacked-start")
    assert result.returncode == 0
    assert result.stdout == b"M84\nG28\n"


def test_cli_unpack_truncated(tmp_path: Path) -> None:
    """Test error on a stream that ends mid-pair."""
    source = tmp_path / "broken.mpk"
    source.write_bytes(bytes([0xFD]))

    result = _run("--unpack", str(source))
    assert result.returncode == 1
    assert b"Truncated" in result.stderr


def test_cli_pack_reserved_byte(tmp_path: Path) -> None:
    """Test error on input containing 0xFF."""
    source = tmp_path / "binary.gcode"
    source.write_bytes(b"G28\xff\n")

    result = _run("--pack", str(source))
    assert result.returncode == 1
    assert b"0xFF" in result.stderr


def test_cli_bad_pad(tmp_path: Path) -> None:
    """Test error on a multi-character pad."""
    source = tmp_path / "part.gcode"
    source.write_bytes(b"G28\n")

    result = _run("--pack", str(source), "--pad", "ab")
    assert result.returncode == 2


def test_cli_analyze(tmp_path: Path, sample_gcode: str) -> None:
    """Test CLI --analyze report."""
    source = tmp_path / "part.gcode"
    source.write_text(sample_gcode)

    result = _run("--analyze", str(source), "--strip-comments", "--baudrate", "250000")
    assert result.returncode == 0
    assert b"Original size" in result.stdout
    assert b"After comment strip" in result.stdout
    assert b"Compression ratio" in result.stdout
    assert b"250000 baud" in result.stdout


def test_cli_missing_file() -> None:
    """Test CLI with a missing file."""
    result = _run("--analyze", "nonexistent.gcode")
    assert result.returncode == 1
    assert b"not found" in result.stderr.lower()
