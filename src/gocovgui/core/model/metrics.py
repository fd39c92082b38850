from __future__ import annotations

from gocovgui.core.model.types import FULL_COVERAGE


def pct(covered: int, total: int, *, full: float = float(FULL_COVERAGE)) -> float:
    """Return the coverage percentage, defaulting to `full` when no total exists."""
    return full if total == 0 else (covered / total) * full


def format_coverage(percent: float, covered: int, total: int) -> str:
    """Format a coverage cell, e.g. ``50.00% (1/2)``."""
    return f"{percent:.2f}% ({covered}/{total})"


__all__ = ["format_coverage", "pct"]
