"""Rust-style reports for lint matches, with source context."""

from __future__ import annotations

import html
import io
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from itertools import islice
from typing import Any, NamedTuple, TextIO

from bpfreport.ansi import COLOR_BLUE, COLOR_BOLD, COLOR_RED, COLOR_RESET
from bpfreport.errors import ConfigError
from bpfreport.highlight import DEFAULT_LANGUAGE, Backend, Highlighter, create_highlighter
from bpfreport.lines import lines_from
from bpfreport.source import Match

logger = logging.getLogger(__name__)

# Context line counts are kept small enough to fit a byte.
MAX_EXTRA_LINES = 255


class FormatTokens(NamedTuple):
    """Styles for the report's own chrome (not for code)."""

    bold: str
    warn: str
    highlight: str
    reset: str


def format_tokens(color: bool, backend: Backend = Backend.TERMINAL) -> FormatTokens:
    """Return the (bold, warn, highlight, reset) strings for a backend.

    HTML output always carries its tags; ``color`` only applies to the
    terminal backend.
    """
    if backend is Backend.HTML:
        return FormatTokens(
            '<span class="bold">',
            '<span class="warn">',
            '<span class="highlight">',
            "</span>",
        )
    if color:
        return FormatTokens(
            COLOR_BOLD,
            f"{COLOR_BOLD}{COLOR_RED}",
            f"{COLOR_BOLD}{COLOR_BLUE}",
            COLOR_RESET,
        )
    return FormatTokens("", "", "", "")


@dataclass(frozen=True)
class ReportOptions:
    """Options for rendering a report.

    ``extra_lines`` is the number of context lines to show before and
    after a match.
    """

    extra_lines: tuple[int, int] = (0, 0)
    color: bool = False
    backend: Backend = Backend.TERMINAL
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self) -> None:
        if not isinstance(self.extra_lines, tuple) or len(self.extra_lines) != 2:
            raise ConfigError(f"extra_lines must be a (before, after) pair, got {self.extra_lines!r}")
        for count in self.extra_lines:
            if isinstance(count, bool) or not isinstance(count, int):
                raise ConfigError(f"context line count must be an integer, got {count!r}")
            if not 0 <= count <= MAX_EXTRA_LINES:
                raise ConfigError(
                    f"context line count must be between 0 and {MAX_EXTRA_LINES}, got {count}"
                )
        if not isinstance(self.backend, Backend):
            raise ConfigError(f"unknown backend {self.backend!r}")

    @property
    def before(self) -> int:
        return self.extra_lines[0]

    @property
    def after(self) -> int:
        return self.extra_lines[1]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], source: str | None = None) -> ReportOptions:
        """Build options from a flat mapping such as a ``[report]`` table.

        Recognised keys are ``before``, ``after``, ``color``, ``backend``
        and ``language``. Any other key is rejected.
        """
        unknown = sorted(set(data) - {"before", "after", "color", "backend", "language"})
        if unknown:
            raise ConfigError(f"unknown report option(s): {', '.join(unknown)}", source)

        backend = data.get("backend", Backend.TERMINAL.value)
        try:
            backend = Backend(backend)
        except ValueError:
            raise ConfigError(f"unknown backend {backend!r}", source) from None

        color = data.get("color", False)
        if not isinstance(color, bool):
            raise ConfigError(f"color must be a boolean, got {color!r}", source)
        language = data.get("language", DEFAULT_LANGUAGE)
        if not isinstance(language, str):
            raise ConfigError(f"language must be a string, got {language!r}", source)

        try:
            return cls(
                extra_lines=(data.get("before", 0), data.get("after", 0)),
                color=color,
                backend=backend,
                language=language,
            )
        except ConfigError as e:
            raise ConfigError(str(e), source) from None


class ReportRenderer:
    """Renders lint matches against their source code.

    A renderer owns its highlighter, which is not safe to share between
    threads; use one renderer per thread.
    """

    def __init__(self, opts: ReportOptions | None = None) -> None:
        self.opts = opts or ReportOptions()
        self.highlighter: Highlighter = create_highlighter(
            self.opts.color, self.opts.backend, self.opts.language
        )
        self.tokens = format_tokens(self.opts.color, self.opts.backend)

    def _escape(self, text: str) -> str:
        if self.opts.backend is Backend.HTML:
            return html.escape(text)
        return text

    def render(self, match: Match, code: bytes, path: str | os.PathLike[str]) -> str:
        buf = io.StringIO()
        self.write(match, code, path, buf)
        return buf.getvalue()

    def write(
        self,
        match: Match,
        code: bytes,
        path: str | os.PathLike[str],
        writer: TextIO,
    ) -> None:
        """Write the report for ``match`` to ``writer``, line by line.

        Errors raised by ``writer`` propagate; whatever was written before
        stays written.
        """
        bold, warn, hl, reset = self.tokens
        rng = match.range
        lint_name = self._escape(match.lint_name)
        message = self._escape(match.message)
        display_path = self._escape(os.fspath(path))

        def writeln(line: str) -> None:
            writer.write(f"{line}\n")

        writeln(f"{warn}warning{reset}{bold}: [{lint_name}] {message}{reset}")
        start_row, start_col = rng.start_point.row, rng.start_point.col
        end_row, end_col = rng.end_point.row, rng.end_point.col
        writeln(f"  {hl}-->{reset} {display_path}:{start_row}:{start_col}")

        if rng.is_empty():
            return

        # The end row plus trailing context is the largest line number we
        # may print, so every gutter gets its width.
        prefix_indent = len(str(end_row + self.opts.after))
        # Multi-line matches put a ' / ' or ' | ' marker in front of the
        # code, which context lines have to leave room for.
        code_indent = 0 if start_row == end_row else 3

        prefix = f"{hl}{' ' * prefix_indent} |{reset} "
        writeln(prefix)

        def gutter(row: int) -> str:
            return f"{hl}{row:{prefix_indent}} |{reset} "

        def context_line(row: int, line: memoryview) -> None:
            writeln(f"{gutter(row)}{' ' * code_indent}{self.highlighter.highlight(line)}")

        # Lines before the match come out closest first; collect and flip.
        before = list(islice(reversed(lines_from(code, rng.bytes.start)), self.opts.before))
        if len(before) < self.opts.before:
            logger.debug(
                "only %d of %d context lines available before row %d",
                len(before), self.opts.before, start_row,
            )
        for row_sub, line in reversed(list(enumerate(before))):
            context_line(start_row - row_sub - 1, line)

        lines = lines_from(code, rng.bytes.start)

        if start_row == end_row:
            # A non-empty range always starts on an existing line.
            line = next(lines)
            writeln(f"{gutter(start_row)}{self.highlighter.highlight(line)}")
            carets = "^" * max(1, end_col - start_col)
            writeln(f"{prefix}{' ' * start_col}{warn}{carets}{reset}")
        else:
            for idx, row in enumerate(range(start_row, end_row + 1)):
                c = "/" if idx == 0 else "|"
                # A match may end on the empty line after a trailing
                # newline, which we do not report as a line of its own.
                line = next(lines, None)
                if line is None:
                    logger.debug("source ends before row %d of the match", row)
                    break
                writeln(f"{gutter(row)} {warn}{c}{reset} {self.highlighter.highlight(line)}")
            writeln(f"{prefix} {warn}|{'_' * end_col}^{reset}")

        for row_add, line in enumerate(islice(lines, self.opts.after)):
            context_line(end_row + row_add + 1, line)

        writeln(prefix)


def report_opts(
    match: Match,
    code: bytes,
    path: str | os.PathLike[str],
    opts: ReportOptions,
    writer: TextIO,
) -> None:
    """Report a lint match with the given options.

    Example (``extra_lines=(2, 1)``)::

        warning: [probe-read] bpf_probe_read() is deprecated
          --> example.bpf.c:5:4
          |
        3 |     struct task_struct *prev = (struct task_struct *)ctx[1];
        4 |     struct event event = {0};
        5 |     bpf_probe_read(event.comm, TASK_COMM_LEN, prev->comm);
          |     ^^^^^^^^^^^^^^
        6 |     return 0;
          |
    """
    ReportRenderer(opts).write(match, code, path, writer)


def report(match: Match, code: bytes, path: str | os.PathLike[str], writer: TextIO) -> None:
    """Report a lint match with default options (no context, no color)."""
    report_opts(match, code, path, ReportOptions(), writer)


def render_to_string(
    match: Match,
    code: bytes,
    path: str | os.PathLike[str],
    opts: ReportOptions | None = None,
) -> str:
    return ReportRenderer(opts).render(match, code, path)
