"""Source view rendering: function body text with uncovered regions highlighted."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gocovgui.core.controller import SourceView
    from gocovgui.core.model.function import CharSpan

HIGHLIGHT_STYLE = "on #ffcccc"
MARK = "▌"


def highlighted_text(view: SourceView) -> Text:
    text = Text(view.text, no_wrap=True, overflow="crop")
    for span in view.highlights:
        text.stylize(HIGHLIGHT_STYLE, span.start, span.end)
    return text


def marked_lines(text: str, highlights: Sequence[CharSpan]) -> list[bool]:
    """For each line of *text*, whether any highlight overlaps it."""
    marks: list[bool] = []
    start = 0
    for line in text.split("\n"):
        end = start + len(line)
        marks.append(any(s.start < end and s.end > start for s in highlights))
        start = end + 1
    return marks


@dataclass(frozen=True, slots=True)
class Viewport:
    first: int
    total: int
    height: int

    @property
    def fraction(self) -> float:
        return self.first / self.total if self.total else 0.0


def clamp_first_line(fraction: float, total: int, height: int) -> int:
    """Top line for a fractional offset, kept so the last page stays full."""
    if total <= height:
        return 0
    return min(int(fraction * total), total - height)


def render_source_lines(view: SourceView, viewport: Viewport) -> Text:
    """Return the visible lines, each prefixed by a gutter marking uncovered lines."""
    lines = highlighted_text(view).split("\n", allow_blank=True)
    marks = marked_lines(view.text, view.highlights)
    out = Text(no_wrap=True, overflow="crop")
    stop = min(viewport.first + viewport.height, len(lines))
    for idx in range(viewport.first, stop):
        if idx > viewport.first:
            out.append("\n")
        out.append(MARK if marks[idx] else " ", style="red")
        out.append(" ")
        out.append_text(lines[idx])
    return out


__all__ = [
    "HIGHLIGHT_STYLE",
    "MARK",
    "Viewport",
    "clamp_first_line",
    "highlighted_text",
    "marked_lines",
    "render_source_lines",
]
