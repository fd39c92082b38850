"""A :class:`~gocovgui.core.controller.RenderSurface` drawing with Rich."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from gocovgui.adapters.render.source import Viewport, clamp_first_line, render_source_lines
from gocovgui.adapters.render.table import function_table
from gocovgui.core.build import EMPTY_COVERAGE_STATUS
from gocovgui.core.config import DEFAULT_VIEW_HEIGHT
from gocovgui.core.session import ScrollPosition

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gocovgui.core.controller import SourceView
    from gocovgui.core.model.function import FunctionRow
    from gocovgui.core.sort import Heading


class ConsoleSurface:
    """Keeps the last state pushed by the controller and prints it on demand.

    Errors are printed immediately on *err_console*, the detail (collector
    diagnostics) in a panel of its own.
    """

    def __init__(
        self,
        console: Console | None = None,
        err_console: Console | None = None,
        *,
        height: int = DEFAULT_VIEW_HEIGHT,
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)
        self.height = height
        self.rows: tuple[FunctionRow, ...] = ()
        self.headings: tuple[Heading, ...] = ()
        self.selected: str | None = None
        self.view: SourceView | None = None
        self.coverage_status = EMPTY_COVERAGE_STATUS
        self.path_status = ""
        self.errors: list[str] = []
        self._first_line = 0
        self._x = 0.0

    # --------------------------- RenderSurface ---------------------------------
    def clear_rows(self) -> None:
        self.rows = ()
        self.selected = None

    def show_rows(self, rows: Sequence[FunctionRow], headings: Sequence[Heading]) -> None:
        self.rows = tuple(rows)
        self.headings = tuple(headings)

    def select_row(self, row_id: str) -> None:
        self.selected = row_id

    def show_source(self, view: SourceView) -> None:
        self.view = view
        self._first_line = 0
        if view.scroll is not None:
            self._x = view.scroll.x
            self.scroll_to(view.scroll.y)

    def scroll_position(self) -> ScrollPosition:
        return ScrollPosition(x=self._x, y=self._viewport().fraction)

    def set_status(self, coverage: str, path: str) -> None:
        self.coverage_status = coverage
        self.path_status = path

    def show_error(self, message: str, detail: str | None = None) -> None:
        self.errors.append(message)
        self.err_console.print(Text(f"ERROR: {message}", style="bold red"))
        if detail:
            self.err_console.print(Panel(Text(detail.rstrip()), title="gocov output", border_style="red"))

    # --------------------------- Scrolling -------------------------------------
    def _line_count(self) -> int:
        return self.view.text.count("\n") + 1 if self.view is not None else 0

    def _viewport(self) -> Viewport:
        return Viewport(first=self._first_line, total=self._line_count(), height=self.height)

    def scroll_to(self, fraction: float) -> None:
        self._first_line = clamp_first_line(fraction, self._line_count(), self.height)

    def scroll_lines(self, delta: int) -> None:
        total = self._line_count()
        last = max(0, total - self.height)
        self._first_line = max(0, min(self._first_line + delta, last))

    # --------------------------- Printing --------------------------------------
    def status_line(self) -> Text:
        text = Text()
        if self.path_status:
            text.append(self.path_status, style="dim")
            text.append("  ")
        text.append(self.coverage_status, style="bold")
        return text

    def print_list(self) -> None:
        self.console.print(function_table(self.rows, self.headings, selected=self.selected))
        self.console.print(self.status_line(), soft_wrap=True)

    def print_source(self) -> None:
        if self.view is None:
            self.console.print(Text("No function selected.", style="dim"))
            return
        vp = self._viewport()
        fn = self.view.function
        last = min(vp.first + vp.height, vp.total)
        title = Text(f"{fn.name}  {fn.coverage}")
        subtitle = Text(f"lines {vp.first + 1}-{last} of {vp.total}  {fn.path}")
        self.console.print(
            Panel(render_source_lines(self.view, vp), title=title, subtitle=subtitle, title_align="left")
        )


__all__ = ["ConsoleSurface"]
