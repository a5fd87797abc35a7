"""TOML config loading for bpfreport.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from bpfreport.errors import ConfigError
from bpfreport.report import ReportOptions

CONFIG_NAME = "bpfreport.toml"


@dataclass
class BpfReportConfig:
    report: ReportOptions = field(default_factory=ReportOptions)


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find bpfreport.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> BpfReportConfig:
    """Parse a bpfreport.toml file. Unknown tables and keys are errors."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(e), str(path)) from e

    unknown = sorted(set(data) - {"report"})
    if unknown:
        raise ConfigError(f"unknown table(s): {', '.join(unknown)}", str(path))

    config = BpfReportConfig()

    if "report" in data:
        rpt = data["report"]
        if not isinstance(rpt, dict):
            raise ConfigError("[report] must be a table", str(path))
        config.report = ReportOptions.from_mapping(rpt, str(path))

    return config
