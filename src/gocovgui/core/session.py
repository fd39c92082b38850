"""View state that outlives a single refresh cycle."""

from __future__ import annotations

from dataclasses import dataclass

from gocovgui.core.model.types import SortDirection, SortKey


@dataclass(frozen=True, slots=True)
class ScrollPosition:
    """Fractional ``(x, y)`` offsets of the source viewport, each in ``[0, 1]``."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        """Validate that both fractions are within bounds."""
        if not (0.0 <= self.x <= 1.0 and 0.0 <= self.y <= 1.0):
            msg = f"scroll fractions must be within [0, 1], got ({self.x}, {self.y})"
            raise ValueError(msg)


@dataclass(slots=True)
class ViewSession:
    """Sort order, last selection and pending scroll restore.

    The session is handed to the controller instead of living in globals, so
    one refresh is a function of (collector output, session) only.
    """

    sort_key: SortKey = SortKey.COVERAGE
    sort_direction: SortDirection = SortDirection.DESCENDING
    previous_selection_name: str = ""
    saved_scroll: ScrollPosition | None = None

    def take_saved_scroll(self) -> ScrollPosition | None:
        """Return the saved scroll position once, clearing it."""
        pos, self.saved_scroll = self.saved_scroll, None
        return pos


__all__ = ["ScrollPosition", "ViewSession"]
