from gocovgui.core.build import (
    EMPTY_COVERAGE_STATUS,
    CoverageTotals,
    build_functions,
    coverage_totals,
    find_selection,
    overall_coverage_status,
    resolve_function,
    source_directory,
)
from gocovgui.core.busy import BusyTicker
from gocovgui.core.config import LOG_FORMAT, GocovguiConfig, load_config
from gocovgui.core.controller import Controller, ControllerState, RenderSurface, SourceView
from gocovgui.core.model import (
    CharSpan,
    CoverageRun,
    Function,
    FunctionRow,
    SortDirection,
    SortKey,
    StatementRange,
    decode_run,
)
from gocovgui.core.offsets import byte_to_char_offset, byte_to_char_offsets, highlight_range_nicely
from gocovgui.core.session import ScrollPosition, ViewSession
from gocovgui.core.sort import Heading, headings, make_comparator, sort_functions

__all__ = [
    "EMPTY_COVERAGE_STATUS",
    "LOG_FORMAT",
    "BusyTicker",
    "CharSpan",
    "Controller",
    "ControllerState",
    "CoverageRun",
    "CoverageTotals",
    "Function",
    "FunctionRow",
    "GocovguiConfig",
    "Heading",
    "RenderSurface",
    "ScrollPosition",
    "SortDirection",
    "SortKey",
    "SourceView",
    "StatementRange",
    "ViewSession",
    "build_functions",
    "byte_to_char_offset",
    "byte_to_char_offsets",
    "coverage_totals",
    "decode_run",
    "find_selection",
    "headings",
    "highlight_range_nicely",
    "load_config",
    "make_comparator",
    "overall_coverage_status",
    "resolve_function",
    "sort_functions",
    "source_directory",
]
