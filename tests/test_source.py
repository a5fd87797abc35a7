"""Tests for source points and ranges."""

from __future__ import annotations

import pytest

from bpfreport.source import Match, Point, Range


class TestPoint:
    def test_row_major_order(self):
        assert Point(1, 9) < Point(2, 0)
        assert Point(2, 3) < Point(2, 4)

    def test_str(self):
        assert str(Point(3, 7)) == "3:7"


class TestRange:
    def test_default_is_empty(self):
        rng = Range()
        assert rng.is_empty()
        assert rng.start_point == Point(0, 0)

    def test_from_bytes_single_line(self):
        rng = Range.from_bytes(b"int main() {}\n", 4, 8)
        assert rng.bytes == range(4, 8)
        assert rng.start_point == Point(0, 4)
        assert rng.end_point == Point(0, 8)

    def test_from_bytes_multi_line(self):
        code = b"a\nbcd\nef\n"
        rng = Range.from_bytes(code, 3, 8)
        assert rng.start_point == Point(1, 1)
        assert rng.end_point == Point(2, 2)

    def test_from_bytes_end_of_buffer(self):
        code = b"#define DONT_ENABLE 1\n"
        rng = Range.from_bytes(code, 0, len(code))
        assert rng.end_point == Point(1, 0)

    def test_from_bytes_rejects_reversed(self):
        with pytest.raises(ValueError, match="invalid byte range"):
            Range.from_bytes(b"abc", 2, 1)

    def test_from_bytes_rejects_out_of_bounds(self):
        with pytest.raises(ValueError):
            Range.from_bytes(b"abc", 0, 4)


class TestMatch:
    def test_frozen(self):
        m = Match("lint", "message", Range())
        with pytest.raises(AttributeError):
            m.message = "other"  # type: ignore[misc]
