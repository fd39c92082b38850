from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from gocovgui.core.model.types import SortDirection, SortKey

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gocovgui.core.model.function import FunctionRow
    from gocovgui.core.sort import Heading

_TITLES = {
    SortKey.NAME: "Function",
    SortKey.FILE: "File",
    SortKey.COVERAGE: "Coverage",
}
_ARROWS = {
    SortDirection.ASCENDING: "▲",
    SortDirection.DESCENDING: "▼",
}
SELECTED_STYLE = "reverse"


def _heading_title(heading: Heading) -> str:
    title = _TITLES[heading.key]
    return f"{title} {_ARROWS[heading.arrow]}" if heading.arrow is not None else title


def function_table(
    rows: Sequence[FunctionRow],
    headings: Sequence[Heading],
    *,
    selected: str | None = None,
) -> Table:
    """Build the function list: a position column plus one column per heading."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    for h in headings:
        justify = "right" if h.key is SortKey.COVERAGE else "left"
        table.add_column(_heading_title(h), justify=justify, no_wrap=h.key is SortKey.COVERAGE)

    columns = {SortKey.NAME: "name", SortKey.FILE: "file", SortKey.COVERAGE: "coverage"}
    for pos, row in enumerate(rows, start=1):
        is_selected = row.id == selected
        # names such as (*List[T]).Push must not be read as markup
        cells = [Text(f"*{pos}" if is_selected else str(pos))]
        cells.extend(Text(getattr(row, columns[h.key])) for h in headings)
        table.add_row(*cells, style=SELECTED_STYLE if is_selected else None)
    return table


__all__ = ["SELECTED_STYLE", "function_table"]
