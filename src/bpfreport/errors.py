"""Errors raised while configuring or rendering lint reports."""

from __future__ import annotations


class ReportError(Exception):
    """Base class for all report errors."""


class HighlightConfigError(ReportError):
    """The syntax highlighter could not be set up.

    This points at a packaging or configuration defect (an unknown lexer,
    a broken Pygments install) rather than at the code being reported.
    """

    def __init__(self, language: str, reason: str) -> None:
        self.language = language
        self.reason = reason
        super().__init__(f"failed to configure highlighter for `{language}`: {reason}")


class HighlightError(ReportError):
    """A single source line failed to highlight."""

    def __init__(self, line: bytes, cause: Exception) -> None:
        self.line = line
        text = line.decode("utf-8", errors="replace")
        super().__init__(f"failed to highlight source code line `{text}`: {cause}")


class ConfigError(ReportError):
    """Invalid or unrecognised report configuration."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)
