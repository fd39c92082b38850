"""Selection/render controller: drives one refresh cycle and source renders.

The controller owns the current function model and pushes everything the
user sees through a :class:`RenderSurface`. All model-mutating operations
are serialised on one re-entrant lock, and every published model is an
immutable tuple, so a render never observes a half-built refresh.

States: ``IDLE`` (nothing selected) -> ``LOADING`` (selection received) ->
``RENDERED`` (source and highlights delivered); a new refresh starts over
from ``IDLE``.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from gocovgui._meta import logger
from gocovgui.core.build import (
    EMPTY_COVERAGE_STATUS,
    build_functions,
    find_selection,
    overall_coverage_status,
    resolve_function,
    source_directory,
)
from gocovgui.core.model.function import CharSpan
from gocovgui.core.model.raw import decode_run
from gocovgui.core.offsets import byte_to_char_offsets, display_text, highlight_range_nicely
from gocovgui.core.session import ViewSession
from gocovgui.core.sort import headings, next_direction, sort_functions
from gocovgui.errors import CollectionError, DecodeError, GocovguiError, SourceReadError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from gocovgui.core.model.function import Function, FunctionRow
    from gocovgui.core.model.types import SortDirection, SortKey
    from gocovgui.core.session import ScrollPosition
    from gocovgui.core.sort import Heading


class ControllerState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"


@dataclass(frozen=True, slots=True)
class SourceView:
    """Body text of the selected function plus its highlight ranges.

    ``scroll`` is set only on the first render after a refresh and is to be
    applied once the text has been populated.
    """

    function: Function
    text: str
    highlights: tuple[CharSpan, ...]
    scroll: ScrollPosition | None = None


class RenderSurface(Protocol):
    """What the controller needs from a list view, a text view and a status bar."""

    def clear_rows(self) -> None: ...

    def show_rows(self, rows: Sequence[FunctionRow], headings: Sequence[Heading]) -> None: ...

    def select_row(self, row_id: str) -> None: ...

    def show_source(self, view: SourceView) -> None: ...

    def scroll_position(self) -> ScrollPosition: ...

    def set_status(self, coverage: str, path: str) -> None: ...

    def show_error(self, message: str, detail: str | None = None) -> None: ...


class Controller:
    def __init__(
        self,
        surface: RenderSurface,
        collector: Callable[[], bytes],
        session: ViewSession | None = None,
    ) -> None:
        self.surface = surface
        self.collector = collector
        self.session = session if session is not None else ViewSession()
        self.state = ControllerState.IDLE
        self.functions: tuple[Function, ...] = ()
        self.ordered: tuple[Function, ...] = ()
        self.selected: Function | None = None
        self.last_error: GocovguiError | None = None
        self._lock = threading.RLock()

    # --------------------------- Refresh ---------------------------------------
    def refresh(self, *, render_selection: bool = True) -> bool:
        """Run the collector and replace the model.

        The row to select is the one named like the previous selection, or the
        first row. With *render_selection* false it is only marked, its source
        is not read.

        Returns ``False`` when collection, decoding or building failed; the
        failure has then been reported on the surface and the previous model is
        shown again. A failure to read the selected function's source is
        reported too, but the new model and the marked row stay.
        """
        with self._lock:
            previous = (self.state, self.selected)
            self.state = ControllerState.IDLE
            self.selected = None
            self.last_error = None
            self.session.saved_scroll = self.surface.scroll_position()
            self.surface.clear_rows()
            self.surface.set_status(EMPTY_COVERAGE_STATUS, "")

            try:
                functions = build_functions(decode_run(self.collector()))
            except CollectionError as exc:
                logger.warning("coverage collection failed: %s", exc)
                self._abort_refresh(previous, exc, exc.detail)
                return False
            except DecodeError as exc:
                logger.warning("%s", exc)
                self._abort_refresh(previous, exc)
                return False

            self.functions = functions
            self._publish()

            selection = find_selection(self.functions, self.session.previous_selection_name)
            if selection is None and self.ordered:
                selection = self.ordered[0].id
            if selection is None:
                self.session.saved_scroll = None
                return True

            self.surface.select_row(selection)
            self.selected = resolve_function(self.functions, selection)
            if not render_selection:
                self.session.saved_scroll = None
                return True
            try:
                self.select(selection)
            except SourceReadError as exc:
                logger.warning("%s", exc)
                self.last_error = exc
                self.session.saved_scroll = None
                self.surface.show_error(str(exc))
            return True

    def _abort_refresh(
        self,
        previous: tuple[ControllerState, Function | None],
        exc: GocovguiError,
        detail: str | None = None,
    ) -> None:
        self.last_error = exc
        self.session.saved_scroll = None
        self.state, self.selected = previous
        self.surface.show_error(str(exc), detail)
        self._publish()
        if self.selected is not None:
            self.surface.select_row(self.selected.id)

    def _publish(self) -> None:
        self.ordered = sort_functions(self.functions, self.session.sort_key, self.session.sort_direction)
        self.surface.show_rows(self.rows(), self.headings())
        if self.functions:
            self.surface.set_status(overall_coverage_status(self.functions), source_directory(self.functions))

    # --------------------------- Sorting ---------------------------------------
    def sort(self, key: SortKey, direction: SortDirection | None = None) -> None:
        """Order the list by *key*; without *direction*, toggle like a column heading."""
        with self._lock:
            if direction is None:
                direction = next_direction(self.session.sort_key, self.session.sort_direction, key)
            self.session.sort_key = key
            self.session.sort_direction = direction
            logger.debug("sorting by %s (%s)", key, direction)
            self.ordered = sort_functions(self.functions, key, direction)
            self.surface.show_rows(self.rows(), self.headings())
            if self.selected is not None:
                self.surface.select_row(self.selected.id)

    def rows(self) -> tuple[FunctionRow, ...]:
        return tuple(fn.row() for fn in self.ordered)

    def headings(self) -> tuple[Heading, ...]:
        return headings(self.session.sort_key, self.session.sort_direction)

    # --------------------------- Selection -------------------------------------
    def select(self, row_id: str) -> SourceView:
        """Render the function behind *row_id*.

        Raises
        ------
        SelectionResolutionError
            *row_id* does not belong to the current model.
        SourceReadError
            The function's source file could not be read.
        """
        with self._lock:
            fn = resolve_function(self.functions, row_id)
            logger.debug("selected %s -> %s", row_id, fn.name)
            previous = (self.state, self.selected)
            self.state = ControllerState.LOADING
            try:
                data = fn.path.read_bytes()
            except OSError as exc:
                self.state, self.selected = previous
                msg = f"cannot read source of {fn.name}: {exc}"
                raise SourceReadError(msg) from exc

            body = data[fn.body_start : fn.body_end]
            view = SourceView(
                function=fn,
                text=display_text(body),
                highlights=tuple(self._highlights(fn, body)),
                scroll=self.session.take_saved_scroll(),
            )
            self.surface.show_source(view)
            if view.scroll is not None:
                logger.debug("restored scroll position %s", view.scroll)

            self.session.previous_selection_name = fn.name
            self.selected = fn
            self.state = ControllerState.RENDERED
            return view

    def _highlights(self, fn: Function, body: bytes) -> list[CharSpan]:
        in_body = [s for s in fn.uncovered if 0 <= s.byte_start <= s.byte_end <= len(body)]
        if len(in_body) != len(fn.uncovered):
            logger.warning(
                "%s: %d statements fall outside the function body",
                fn.name,
                len(fn.uncovered) - len(in_body),
            )

        pending = [s for s in in_body if not s.resolved]
        if pending:
            offsets = byte_to_char_offsets(
                body, itertools.chain.from_iterable((s.byte_start, s.byte_end) for s in pending)
            )
            for s in pending:
                s.chars = CharSpan(offsets[s.byte_start], offsets[s.byte_end])

        spans: list[CharSpan] = []
        for s in in_body:
            if s.chars is None:
                continue
            spans.extend(highlight_range_nicely(s.chars.start, body[s.byte_start : s.byte_end]))
        return spans


__all__ = [
    "Controller",
    "ControllerState",
    "RenderSurface",
    "SourceView",
]
