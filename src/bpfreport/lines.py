"""Line-wise views into a source buffer, anchored at a byte offset."""

from __future__ import annotations

from collections.abc import Iterator


class Lines:
    """Iterate the lines of ``code`` starting at the line containing ``offset``.

    Forward iteration yields the anchor line and every line after it;
    ``reversed()`` yields the lines before the anchor line, closest first.
    Yielded lines are ``memoryview`` slices of ``code`` without their
    terminating newline. An instance is a one-shot iterator.
    """

    def __init__(self, code: bytes, offset: int) -> None:
        self._view = memoryview(code)
        offset = min(max(offset, 0), len(code))
        self._anchor = code.rfind(b"\n", 0, offset) + 1
        self._code = code
        self._pos = self._anchor

    def __iter__(self) -> Iterator[memoryview]:
        return self

    def __next__(self) -> memoryview:
        start = self._pos
        if start >= len(self._code):
            raise StopIteration
        end = self._code.find(b"\n", start)
        if end == -1:
            end = len(self._code)
        self._pos = end + 1
        return self._view[start:end]

    def __reversed__(self) -> Iterator[memoryview]:
        end = self._anchor - 1
        while end >= 0:
            start = self._code.rfind(b"\n", 0, end) + 1
            yield self._view[start:end]
            end = start - 1


def lines_from(code: bytes, offset: int) -> Lines:
    return Lines(code, offset)
