from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from gocovgui.core.session import ScrollPosition

GO_SOURCE = """\
package calc

func Add(a, b int) int {
\tif a < 0 {
\t\treturn 0
\t}
\treturn a + b
}

func Greet(name string) string {
\treturn "héllo, " +
\t\tname
}

func Noop() {}
"""

# (function, [(statement text, reached), ...]) in source order
CALC_FUNCTIONS: list[tuple[str, list[tuple[str, int]]]] = [
    ("Add", [("if a < 0 {\n\t\treturn 0\n\t}", 1), ("return 0", 0), ("return a + b", 1)]),
    ("Greet", [('return "héllo, " +\n\t\tname', 0)]),
    ("Noop", []),
]


def function_record(path: Path, name: str, statements: Iterable[tuple[str, int]]) -> dict[str, Any]:
    """Build one gocov function record from snippets of the file at *path*."""
    source = path.read_bytes()
    start = source.index(f"func {name}(".encode())
    end = source.find(b"\n\nfunc ", start)
    if end == -1:
        end = len(source.rstrip(b"\n"))
    stmts = []
    for text, reached in statements:
        s = source.index(text.encode(), start)
        stmts.append({"Start": s, "End": s + len(text.encode()), "Reached": reached})
    return {"Name": name, "File": str(path), "Start": start, "End": end, "Statements": stmts}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Click CLI runner for invoking the command-line interface."""
    return CliRunner()


@pytest.fixture
def calc_go(tmp_path: Path) -> Path:
    pkg = tmp_path / "calc"
    pkg.mkdir()
    path = pkg / "calc.go"
    path.write_text(GO_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def gocov_json(calc_go: Path) -> Callable[..., str]:
    def build(
        functions: Sequence[tuple[str, list[tuple[str, int]]]] = CALC_FUNCTIONS,
        package: str = "calc",
    ) -> str:
        records = [function_record(calc_go, name, stmts) for name, stmts in functions]
        return json.dumps({"Packages": [{"Name": package, "Functions": records}]})

    return build


@pytest.fixture
def gocov_file(tmp_path: Path, gocov_json: Callable[..., str]) -> Callable[..., Path]:
    def write(*args: Any, filename: str = "cov.json", **kwargs: Any) -> Path:
        path = tmp_path / filename
        path.write_text(gocov_json(*args, **kwargs), encoding="utf-8")
        return path

    return write


class RecordingSurface:
    """Render surface that records what the controller pushes to it."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.rows: tuple[Any, ...] = ()
        self.headings: tuple[Any, ...] = ()
        self.selected: str | None = None
        self.views: list[Any] = []
        self.statuses: list[tuple[str, str]] = []
        self.errors: list[tuple[str, str | None]] = []
        self.scroll = ScrollPosition()

    def clear_rows(self) -> None:
        self.calls.append("clear_rows")
        self.rows = ()
        self.selected = None

    def show_rows(self, rows: Sequence[Any], headings: Sequence[Any]) -> None:
        self.calls.append("show_rows")
        self.rows = tuple(rows)
        self.headings = tuple(headings)

    def select_row(self, row_id: str) -> None:
        self.calls.append("select_row")
        self.selected = row_id

    def show_source(self, view: Any) -> None:
        self.calls.append("show_source")
        self.views.append(view)

    def scroll_position(self) -> ScrollPosition:
        return self.scroll

    def set_status(self, coverage: str, path: str) -> None:
        self.statuses.append((coverage, path))

    def show_error(self, message: str, detail: str | None = None) -> None:
        self.calls.append("show_error")
        self.errors.append((message, detail))


class ScriptedCollector:
    """Collector returning queued results in turn; exceptions are raised."""

    def __init__(self, *results: bytes | str | Exception) -> None:
        self.results = list(results)
        self.calls = 0

    def push(self, result: bytes | str | Exception) -> None:
        self.results.append(result)

    def __call__(self) -> bytes:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result.encode() if isinstance(result, str) else result


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def scripted_collector() -> type[ScriptedCollector]:
    return ScriptedCollector
