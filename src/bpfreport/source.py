"""Source locations and lint match records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Point:
    """A zero-based row/column position. Columns count bytes."""

    row: int = 0
    col: int = 0

    def __str__(self) -> str:
        return f"{self.row}:{self.col}"


def _point_at(code: bytes, offset: int) -> Point:
    line_start = code.rfind(b"\n", 0, offset) + 1
    return Point(code.count(b"\n", 0, offset), offset - line_start)


@dataclass(frozen=True)
class Range:
    """A byte range within a source buffer, with matching start/end points."""

    bytes: range = range(0, 0)
    start_point: Point = field(default_factory=Point)
    end_point: Point = field(default_factory=Point)

    @classmethod
    def from_bytes(cls, code: bytes, start: int, end: int) -> Range:
        """Build a range over ``code[start:end]``, deriving rows and columns."""
        if not 0 <= start <= end <= len(code):
            raise ValueError(
                f"invalid byte range {start}..{end} for a buffer of {len(code)} bytes"
            )
        return cls(range(start, end), _point_at(code, start), _point_at(code, end))

    def is_empty(self) -> bool:
        return len(self.bytes) == 0


@dataclass(frozen=True)
class Match:
    """A single lint finding, as produced by the linter."""

    lint_name: str
    message: str
    range: Range
