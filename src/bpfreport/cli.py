"""bpfreport CLI."""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path

import click

from bpfreport import __version__
from bpfreport.config import find_config, load_config
from bpfreport.errors import ReportError
from bpfreport.highlight import Backend
from bpfreport.report import MAX_EXTRA_LINES, ReportOptions, report_opts
from bpfreport.source import Match, Range

_RANGE_RE = re.compile(r"^(\d+)\.\.(\d+)$")


def _parse_range(ctx: click.Context, param: click.Parameter, value: str) -> tuple[int, int]:
    m = _RANGE_RE.match(value)
    if not m:
        raise click.BadParameter("expected START..END byte offsets, e.g. 68..140")
    return int(m.group(1)), int(m.group(2))


def _base_options(file: Path, config_file: str | None) -> ReportOptions | None:
    """Options from an explicit config file, or from bpfreport.toml above FILE."""
    if config_file is not None:
        return load_config(Path(config_file)).report
    try:
        return load_config(find_config(file)).report
    except FileNotFoundError:
        return None


@click.group()
@click.version_option(__version__, prog_name="bpfreport")
def main() -> None:
    """Render reports for BPF C lint matches."""


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--range", "byte_range", required=True, callback=_parse_range,
    help="Byte range of the match, as START..END.",
)
@click.option("--name", "lint_name", default="lint", show_default=True, help="Lint name.")
@click.option("--message", default="", help="Lint message.")
@click.option(
    "-B", "--before", type=click.IntRange(0, MAX_EXTRA_LINES), default=None,
    help="Context lines before the match.",
)
@click.option(
    "-A", "--after", type=click.IntRange(0, MAX_EXTRA_LINES), default=None,
    help="Context lines after the match.",
)
@click.option("--color/--no-color", default=None, help="Colorize terminal output.")
@click.option("--html", "use_html", is_flag=True, help="Emit HTML markup instead of terminal text.")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="Read options from this bpfreport.toml.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def report(
    file: str,
    byte_range: tuple[int, int],
    lint_name: str,
    message: str,
    before: int | None,
    after: int | None,
    color: bool | None,
    use_html: bool,
    config_file: str | None,
    verbose: bool,
) -> None:
    """Report a match in FILE covering the given byte range."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = Path(file)
    code = path.read_bytes()

    try:
        base = _base_options(path, config_file)
        if color is None:
            color = base.color if base is not None else sys.stdout.isatty()
        base = base or ReportOptions()
        opts = ReportOptions(
            extra_lines=(
                base.before if before is None else before,
                base.after if after is None else after,
            ),
            color=color,
            backend=Backend.HTML if use_html else base.backend,
            language=base.language,
        )
        rng = Range.from_bytes(code, *byte_range)
        report_opts(Match(lint_name, message, rng), code, file, opts, sys.stdout)
    except (ReportError, ValueError, OSError) as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)
