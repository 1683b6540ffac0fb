"""Unit tests for G-code preprocessing."""

from __future__ import annotations

from meatpack import minify, minify_text, strip_comment


class TestStripComment:
    """Test single-line comment removal."""

    def test_semicolon_comment(self) -> None:
        assert strip_comment("G28 ; home all") == "G28"

    def test_paren_comment(self) -> None:
        assert strip_comment("G1 X10 (prime line) E0.8") == "G1 X10  E0.8"

    def test_comment_only(self) -> None:
        assert strip_comment("; layer 2") == ""

    def test_plain_line(self) -> None:
        assert strip_comment("  M84\r") == "M84"


class TestMinify:
    """Test whole-file minification."""

    def test_drops_blank_and_comment_lines(self, sample_gcode: str) -> None:
        """Test that only commands survive."""
        lines = list(minify(sample_gcode))

        assert lines[0] == "M104 S215\n"
        assert "G28\n" in lines
        assert all(line.endswith("\n") and line.strip() for line in lines)
        assert len(lines) == 7

    def test_accepts_iterable(self) -> None:
        """Test minifying an iterable of lines."""
        assert list(minify(["G28\n", "\n", "M84 ; off\n"])) == ["G28\n", "M84\n"]

    def test_minify_text(self) -> None:
        """Test the joined form."""
        assert minify_text("G28 ; home\r\n\r\nM84\r\n") == "G28\nM84\n"

    def test_empty(self) -> None:
        assert minify_text("") == ""
