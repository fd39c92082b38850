from __future__ import annotations

import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from gocovgui import __version__
from gocovgui.adapters.render.source import MARK
from gocovgui.cli import cli
from gocovgui.cli._shared import exit_code_for
from gocovgui.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_OK,
    EXIT_SOFTWARE,
    EXIT_UNAVAILABLE,
)
from gocovgui.errors import (
    CollectionError,
    ConfigError,
    DecodeError,
    SelectionResolutionError,
    SourceReadError,
    ToolAcquisitionError,
    ToolNotFoundError,
)

# --------------------------------------------------------------------------- #
# helpers                                                                     #
# --------------------------------------------------------------------------- #


def _run(runner: CliRunner, args: list[str], stdin: str | None = None) -> tuple[int, str]:
    """Invoke the CLI and return *(exit_code, output)* for convenience."""
    result = runner.invoke(cli, args, input=stdin)
    return result.exit_code, result.output


@pytest.fixture(autouse=True)
def project_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    (tmp_path / "go.mod").write_text("module example.com/calc\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _positions(output: str, *names: str) -> list[int]:
    return [output.index(name) for name in names]


# --------------------------------------------------------------------------- #
# root                                                                        #
# --------------------------------------------------------------------------- #


def test_version(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, ["--version"])
    assert code == EXIT_OK
    assert f"gocovgui {__version__}" in out


def test_help_lists_commands(cli_runner: CliRunner) -> None:
    code, out = _run(cli_runner, ["--help"])
    assert code == EXIT_OK
    for command in ("report", "show", "browse", "install"):
        assert command in out


# --------------------------------------------------------------------------- #
# report                                                                      #
# --------------------------------------------------------------------------- #


def test_report_from_file(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    code, out = _run(cli_runner, ["report", "--input", str(gocov_file())])

    assert code == EXIT_OK
    assert "Coverage ▼" in out
    assert "66.67% (2/3)" in out
    assert "Overall coverage: 50.00% (2/4)" in out
    a, b, c = _positions(out, "calc.Noop", "calc.Add", "calc.Greet")
    assert a < b < c


def test_report_sort_options(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    args = ["-q", "report", "-i", str(gocov_file()), "--sort", "name", "--order", "asc"]
    code, out = _run(cli_runner, args)

    assert code == EXIT_OK
    assert "Function ▲" in out
    a, b, c = _positions(out, "calc.Add", "calc.Greet", "calc.Noop")
    assert a < b < c


def test_report_uses_project_config(
    cli_runner: CliRunner, gocov_file: Callable[..., Path], project_cwd: Path
) -> None:
    (project_cwd / ".gocovgui.toml").write_text('sort = "name"\norder = "desc"\n', encoding="utf-8")
    path = str(gocov_file())

    _, out = _run(cli_runner, ["report", "-i", path])
    a, b, c = _positions(out, "calc.Noop", "calc.Greet", "calc.Add")
    assert a < b < c

    _, out = _run(cli_runner, ["report", "-i", path, "--order", "asc"])
    a, b, c = _positions(out, "calc.Add", "calc.Greet", "calc.Noop")
    assert a < b < c


def test_report_bad_config(cli_runner: CliRunner, gocov_file: Callable[..., Path], project_cwd: Path) -> None:
    (project_cwd / ".gocovgui.toml").write_text('sort = "size"\n', encoding="utf-8")
    code, out = _run(cli_runner, ["report", "-i", str(gocov_file())])
    assert code == EXIT_CONFIG
    assert "invalid sort" in out


def test_report_undecodable_input(cli_runner: CliRunner, tmp_path: Path) -> None:
    bad = tmp_path / "cov.json"
    bad.write_text("ok  example.com/calc  0.002s\n", encoding="utf-8")
    code, out = _run(cli_runner, ["report", "-i", str(bad)])
    assert code == EXIT_DATAERR
    assert "failed to decode gocov output" in out


def test_report_missing_input(cli_runner: CliRunner, tmp_path: Path) -> None:
    code, out = _run(cli_runner, ["report", "-i", str(tmp_path / "nope.json")])
    assert code == EXIT_GENERIC
    assert "cannot read coverage data" in out


def test_report_from_stdin(cli_runner: CliRunner, gocov_json: Callable[..., str]) -> None:
    code, out = _run(cli_runner, ["report", "-i", "-"], stdin=gocov_json())
    assert code == EXIT_OK
    assert "calc.Greet" in out


def test_report_runs_gocov(
    cli_runner: CliRunner, gocov_json: Callable[..., str], monkeypatch: pytest.MonkeyPatch
) -> None:
    commands: list[list[str]] = []

    def fake_run(cmd, **kwargs):
        commands.append(cmd)
        return subprocess.CompletedProcess(cmd, 0, stdout=gocov_json().encode(), stderr=b"")

    monkeypatch.setattr("gocovgui.cli._shared.require_gocov", lambda explicit=None: Path("/go/bin/gocov"))
    monkeypatch.setattr("gocovgui.adapters.collector.gocov.subprocess.run", fake_run)

    code, out = _run(cli_runner, ["report", "./..."])

    assert code == EXIT_OK
    assert commands == [[str(Path("/go/bin/gocov")), "test", "./..."]]
    assert "calc.Add" in out


def test_report_gocov_failure_shows_output(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 2, stdout=b"", stderr=b"no Go files in /src/empty\n")

    monkeypatch.setattr("gocovgui.cli._shared.require_gocov", lambda explicit=None: Path("/go/bin/gocov"))
    monkeypatch.setattr("gocovgui.adapters.collector.gocov.subprocess.run", fake_run)

    code, out = _run(cli_runner, ["report"])

    assert code == EXIT_GENERIC
    assert "gocov test failed (exit status 2)" in out
    assert "no Go files in /src/empty" in out


def test_report_without_gocov(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(explicit=None):
        msg = "gocovgui failed to find the gocov tool."
        raise ToolNotFoundError(msg, searched=("$PATH", "/home/u/go/bin/gocov"))

    monkeypatch.setattr("gocovgui.cli._shared.require_gocov", missing)

    code, out = _run(cli_runner, ["report"])

    assert code == EXIT_UNAVAILABLE
    assert "gocov not found" in out
    assert "Searched: $PATH, /home/u/go/bin/gocov" in out


# --------------------------------------------------------------------------- #
# show                                                                        #
# --------------------------------------------------------------------------- #


def test_show_function(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    code, out = _run(cli_runner, ["show", "calc.Greet", "-i", str(gocov_file())])

    assert code == EXIT_OK
    assert "calc.Greet  0.00% (0/1)" in out
    assert "héllo" in out
    assert MARK in out


def test_show_unknown_function(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    code, out = _run(cli_runner, ["show", "calc.Sub", "-i", str(gocov_file())])
    assert code == EXIT_NOINPUT
    assert "no function named 'calc.Sub'" in out


def test_show_missing_source(
    cli_runner: CliRunner, gocov_file: Callable[..., Path], calc_go: Path
) -> None:
    cov = gocov_file()
    calc_go.unlink()
    code, out = _run(cli_runner, ["show", "calc.Add", "-i", str(cov)])
    assert code == EXIT_NOINPUT
    assert "cannot read source of calc.Add" in out


def test_show_height_limits_lines(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    code, out = _run(cli_runner, ["show", "calc.Add", "-i", str(gocov_file()), "--height", "2"])
    assert code == EXIT_OK
    assert "lines 1-2 of 6" in out
    assert "return a + b" not in out


# --------------------------------------------------------------------------- #
# browse                                                                      #
# --------------------------------------------------------------------------- #


def test_browse_session(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    script = "\n".join(["s name asc", "o 2", "j 1", "s", "bogus", "h", "q", ""])
    code, out = _run(cli_runner, ["browse", "-i", str(gocov_file())], stdin=script)

    assert code == EXIT_OK
    assert "calc.Noop  100.00% (0/0)" in out
    assert "Function ▲" in out
    assert "calc.Greet  0.00% (0/1)" in out
    assert "usage: s name|file|coverage [asc|desc]" in out
    assert "unknown command 'bogus'" in out
    assert "Commands:" in out


def test_browse_ends_on_eof(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    code, _ = _run(cli_runner, ["browse", "-i", str(gocov_file())], stdin="")
    assert code == EXIT_OK


def test_browse_open_by_name_and_id(cli_runner: CliRunner, gocov_file: Callable[..., Path]) -> None:
    script = "\n".join(["o calc.Add", "o fi_1", "o 9", "o calc.Sub", "q", ""])
    code, out = _run(cli_runner, ["browse", "-i", str(gocov_file())], stdin=script)

    assert code == EXIT_OK
    assert "calc.Add  66.67% (2/3)" in out
    assert "calc.Greet  0.00% (0/1)" in out
    assert "no row 9" in out
    assert "no function named 'calc.Sub'" in out


# --------------------------------------------------------------------------- #
# install                                                                     #
# --------------------------------------------------------------------------- #


def test_install(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    installed = tmp_path / "go" / "bin" / "gocov"
    monkeypatch.setattr("gocovgui.cli.install.acquire_gocov", lambda: installed)
    code, out = _run(cli_runner, ["install"])
    assert code == EXIT_OK
    assert f"gocov installed: {installed}" in out


def test_install_failure_is_fatal(cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    def fail():
        msg = "go install failed (exit status 1)"
        raise ToolAcquisitionError(msg, detail="dial tcp: lookup proxy.golang.org")

    monkeypatch.setattr("gocovgui.cli.install.acquire_gocov", fail)
    code, out = _run(cli_runner, ["install"])
    assert code == EXIT_UNAVAILABLE
    assert "FATAL: go install failed (exit status 1)" in out
    assert "dial tcp" in out


# --------------------------------------------------------------------------- #
# exit codes                                                                  #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (None, EXIT_GENERIC),
        (CollectionError("x"), EXIT_GENERIC),
        (DecodeError("x"), EXIT_DATAERR),
        (SourceReadError("x"), EXIT_NOINPUT),
        (SelectionResolutionError("x"), EXIT_SOFTWARE),
        (ToolNotFoundError("x"), EXIT_UNAVAILABLE),
        (ConfigError("x"), EXIT_CONFIG),
    ],
)
def test_exit_code_for(exc, code: int) -> None:
    assert exit_code_for(exc) == code
