"""Shared type aliases and enumerations used across gocovgui."""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class SortKey(StrEnum):
    """Columns of the function list the view can be ordered by."""

    NAME = "name"
    FILE = "file"
    COVERAGE = "coverage"


class SortDirection(StrEnum):
    """Ordering direction for the active column."""

    ASCENDING = "asc"
    DESCENDING = "desc"

    @property
    def opposite(self) -> SortDirection:
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


FULL_COVERAGE: int = 100


__all__ = [
    "FULL_COVERAGE",
    "SortDirection",
    "SortKey",
]
