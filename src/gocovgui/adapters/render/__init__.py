from gocovgui.adapters.render.console import ConsoleSurface
from gocovgui.adapters.render.source import HIGHLIGHT_STYLE, highlighted_text, render_source_lines
from gocovgui.adapters.render.table import function_table

__all__ = [
    "HIGHLIGHT_STYLE",
    "ConsoleSurface",
    "function_table",
    "highlighted_text",
    "render_source_lines",
]
