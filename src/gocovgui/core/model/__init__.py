from gocovgui.core.model.function import CharSpan, Function, FunctionRow, StatementRange
from gocovgui.core.model.metrics import format_coverage, pct
from gocovgui.core.model.raw import CoverageRun, RawFunction, RawPackage, RawStatement, decode_run
from gocovgui.core.model.types import FULL_COVERAGE, SortDirection, SortKey

__all__ = [
    "FULL_COVERAGE",
    "CharSpan",
    "CoverageRun",
    "Function",
    "FunctionRow",
    "RawFunction",
    "RawPackage",
    "RawStatement",
    "SortDirection",
    "SortKey",
    "StatementRange",
    "decode_run",
    "format_coverage",
    "pct",
]
