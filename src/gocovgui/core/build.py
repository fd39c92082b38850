"""Build the per-function coverage model from a collector run.

The functions here are pure: the same :class:`CoverageRun` always produces an
equal tuple of :class:`Function` objects, in package/function input order,
with ids derived from that order. Ordering for display is the sort engine's
job (:mod:`gocovgui.core.sort`).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gocovgui._meta import logger
from gocovgui.core.model.function import Function, StatementRange
from gocovgui.core.model.metrics import pct
from gocovgui.errors import DecodeError, SelectionResolutionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from gocovgui.core.model.raw import CoverageRun, RawStatement

_ID_PREFIX = "fi_"
_ID_RE = re.compile(r"^fi_(\d+)$")

EMPTY_COVERAGE_STATUS = "Overall coverage: 0% (0/0)"


# --------------------------- Ids ----------------------------------------------
def function_id(index: int) -> str:
    return f"{_ID_PREFIX}{index}"


def parse_function_id(row_id: str) -> int:
    """Return the model index encoded in *row_id*."""
    m = _ID_RE.match(row_id)
    if not m:
        msg = f"malformed function id: {row_id!r}"
        raise SelectionResolutionError(msg)
    return int(m.group(1))


def resolve_function(functions: Sequence[Function], row_id: str) -> Function:
    """Map a row id back to its function, failing loudly on any mismatch."""
    index = parse_function_id(row_id)
    if index >= len(functions):
        msg = f"function id {row_id!r} out of range (model has {len(functions)} functions)"
        raise SelectionResolutionError(msg)
    fn = functions[index]
    if fn.id != row_id:
        msg = f"function id {row_id!r} resolved to {fn.id!r}"
        raise SelectionResolutionError(msg)
    return fn


# --------------------------- Building -----------------------------------------
def convert_statements(statements: Iterable[RawStatement], offset: int) -> tuple[StatementRange, ...]:
    """Keep unreached statements, rebased to be relative to *offset*."""
    return tuple(
        StatementRange(byte_start=s.start - offset, byte_end=s.end - offset)
        for s in statements
        if s.reached == 0
    )


def build_functions(run: CoverageRun) -> tuple[Function, ...]:
    """Derive one :class:`Function` per record, in input order.

    Raises
    ------
    DecodeError
        When a record holds an inverted statement range.
    """
    out: list[Function] = []
    for package in run.packages:
        for raw in package.functions:
            try:
                uncovered = convert_statements(raw.statements, raw.start)
            except ValueError as exc:
                msg = f"failed to decode gocov output: {package.name}.{raw.name}: {exc}"
                raise DecodeError(msg) from exc
            total = len(raw.statements)
            reached = total - len(uncovered)
            out.append(
                Function(
                    id=function_id(len(out)),
                    name=f"{package.name}.{raw.name}",
                    file=f"{package.name}/{Path(raw.file).name}",
                    path=Path(raw.file),
                    body_start=raw.start,
                    body_end=raw.end,
                    statements_total=total,
                    statements_reached=reached,
                    coverage_percent=pct(reached, total),
                    uncovered=uncovered,
                )
            )
    logger.info("built %d functions from %d packages", len(out), len(run.packages))
    return tuple(out)


def find_selection(functions: Iterable[Function], previous_name: str) -> str | None:
    """Return the id of the function named *previous_name*, if it still exists."""
    if not previous_name:
        return None
    for fn in functions:
        if fn.name == previous_name:
            return fn.id
    return None


# --------------------------- Summarisation ------------------------------------
@dataclass(frozen=True, slots=True)
class CoverageTotals:
    reached: int
    total: int

    @property
    def percent(self) -> float:
        return pct(self.reached, self.total)


def coverage_totals(functions: Iterable[Function]) -> CoverageTotals:
    reached = total = 0
    for fn in functions:
        reached += fn.statements_reached
        total += fn.statements_total
    return CoverageTotals(reached=reached, total=total)


def overall_coverage_status(functions: Iterable[Function]) -> str:
    totals = coverage_totals(functions)
    return f"Overall coverage: {totals.percent:.2f}% ({totals.reached}/{totals.total})"


def source_directory(functions: Sequence[Function]) -> str:
    """Directory of the first function's file, shown as a representative path."""
    if not functions:
        return ""
    return str(functions[0].path.parent)


__all__ = [
    "EMPTY_COVERAGE_STATUS",
    "CoverageTotals",
    "build_functions",
    "convert_statements",
    "coverage_totals",
    "find_selection",
    "function_id",
    "overall_coverage_status",
    "parse_function_id",
    "resolve_function",
    "source_directory",
]
