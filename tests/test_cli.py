"""Tests for the bpfreport CLI."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from bpfreport import __version__
from bpfreport.cli import main

CODE = (
    'SEC("kprobe/test")\n'
    "int handle__test(void)\n"
    "{\n"
    "}\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "test.bpf.c"
    path.write_text(CODE)
    return path


class TestCLI:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "report" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_report(self, runner, source):
        result = runner.invoke(main, [
            "report", str(source), "--range", "4..17",
            "--name", "unstable-attach-point", "--message", "unstable", "--no-color",
        ])
        assert result.exit_code == 0, result.output
        assert result.output == (
            "warning: [unstable-attach-point] unstable\n"
            f"  --> {source}:0:4\n"
            "  | \n"
            '0 | SEC("kprobe/test")\n'
            "  |     ^^^^^^^^^^^^^\n"
            "  | \n"
        )

    def test_context_flags(self, runner, source):
        result = runner.invoke(main, [
            "report", str(source), "--range", "4..17", "-A", "1", "--no-color",
        ])
        assert result.exit_code == 0, result.output
        assert "1 | int handle__test(void)\n" in result.output

    def test_color(self, runner, source):
        result = runner.invoke(main, ["report", str(source), "--range", "4..17", "--color"])
        assert result.exit_code == 0, result.output
        assert "\x1b[" in result.output

    def test_html(self, runner, source):
        result = runner.invoke(main, ["report", str(source), "--range", "4..17", "--html"])
        assert result.exit_code == 0, result.output
        assert '<span class="warn">warning</span>' in result.output

    def test_config_file(self, runner, source, tmp_path):
        (tmp_path / "bpfreport.toml").write_text("[report]\nafter = 2\ncolor = false\n")
        result = runner.invoke(main, ["report", str(source), "--range", "4..17"])
        assert result.exit_code == 0, result.output
        assert "2 | {\n" in result.output
        assert "\x1b[" not in result.output

    def test_flags_override_config(self, runner, source, tmp_path):
        (tmp_path / "bpfreport.toml").write_text("[report]\nafter = 2\n")
        result = runner.invoke(main, [
            "report", str(source), "--range", "4..17", "-A", "0", "--no-color",
        ])
        assert result.exit_code == 0, result.output
        assert "1 | int" not in result.output

    def test_bad_config(self, runner, source, tmp_path):
        (tmp_path / "bpfreport.toml").write_text("[report]\nbogus = 1\n")
        result = runner.invoke(main, ["report", str(source), "--range", "4..17"])
        assert result.exit_code == 1
        assert "error:" in result.output
        assert "bogus" in result.output

    def test_bad_range_syntax(self, runner, source):
        result = runner.invoke(main, ["report", str(source), "--range", "4-17"])
        assert result.exit_code == 2
        assert "START..END" in result.output

    def test_range_out_of_bounds(self, runner, source):
        result = runner.invoke(main, ["report", str(source), "--range", "4..999"])
        assert result.exit_code == 1
        assert "invalid byte range" in result.output

    def test_closed_stdout(self, runner, source, monkeypatch):
        def broken_pipe(*args, **kwargs):
            raise BrokenPipeError(32, "Broken pipe")

        monkeypatch.setattr("bpfreport.cli.report_opts", broken_pipe)
        result = runner.invoke(main, ["report", str(source), "--range", "4..17"])
        assert result.exit_code == 1
        assert "error: " in result.output
        assert "Broken pipe" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_empty_range(self, runner, source):
        result = runner.invoke(main, [
            "report", str(source), "--range", "0..0", "--message", "m", "--no-color",
        ])
        assert result.exit_code == 0, result.output
        assert result.output == f"warning: [lint] m\n  --> {source}:0:0\n"
