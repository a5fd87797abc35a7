"""Terminal and HTML reports for BPF C lint matches."""

from bpfreport.errors import ConfigError, HighlightConfigError, HighlightError, ReportError
from bpfreport.report import ReportOptions, render_to_string, report, report_opts
from bpfreport.source import Match, Point, Range

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "HighlightConfigError",
    "HighlightError",
    "Match",
    "Point",
    "Range",
    "ReportError",
    "ReportOptions",
    "render_to_string",
    "report",
    "report_opts",
]
