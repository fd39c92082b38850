"""Interactive function browser: the terminal counterpart of the viewer window."""

from __future__ import annotations

import re
import shlex
import sys
from typing import TYPE_CHECKING

import click
import typer

from gocovgui._meta import logger
from gocovgui.adapters.collector.gocov import GocovCollector
from gocovgui.adapters.render.console import ConsoleSurface
from gocovgui.cli._shared import (
    ColorOpt,
    GocovOpt,
    InputOpt,
    NoColorOpt,
    OrderOpt,
    SortOpt,
    TargetArg,
    ViewOptions,
    load_config_or_exit,
    make_collector,
    make_consoles,
    make_session,
    tool_not_found,
)
from gocovgui.cli.exit_codes import EXIT_OK
from gocovgui.cli.install import acquire_with_spinner, acquisition_failed
from gocovgui.core.build import find_selection
from gocovgui.core.controller import Controller
from gocovgui.core.model.types import SortDirection, SortKey
from gocovgui.errors import (
    SelectionResolutionError,
    SourceReadError,
    ToolAcquisitionError,
    ToolNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

_BOOL_FALSE = False
_ROW_ID_RE = re.compile(r"^fi_\d+$")

HELP = """\
Commands:
  r               run gocov again (keeps sort order, selection and scroll)
  s COLUMN [DIR]  sort by name|file|coverage; repeat a column to flip it
  o ROW           open a row by position, id (fi_N) or function name
  j [N] / k [N]   scroll the source down / up by N lines (default: a page)
  l               show the function list again
  h               this help
  q               quit"""


class Browser:
    def __init__(self, controller: Controller, surface: ConsoleSurface) -> None:
        self.controller = controller
        self.surface = surface
        self.commands: dict[str, Callable[[list[str]], None]] = {
            "r": self.refresh,
            "s": self.sort,
            "o": self.open,
            "j": self.scroll_down,
            "k": self.scroll_up,
            "l": self.show_list,
            "h": self.help,
        }

    def draw(self) -> None:
        self.surface.print_list()
        self.surface.print_source()

    def refresh(self, _args: list[str]) -> None:
        self.controller.refresh()
        self.draw()

    def sort(self, args: list[str]) -> None:
        if not args:
            self.surface.show_error("usage: s name|file|coverage [asc|desc]")
            return
        try:
            key = SortKey(args[0].lower())
            direction = SortDirection(args[1].lower()) if len(args) > 1 else None
        except ValueError as exc:
            self.surface.show_error(str(exc))
            return
        self.controller.sort(key, direction)
        self.surface.print_list()

    def _row_id(self, arg: str) -> str | None:
        if _ROW_ID_RE.match(arg):
            return arg
        if arg.isdigit():
            pos = int(arg)
            if 1 <= pos <= len(self.controller.ordered):
                return self.controller.ordered[pos - 1].id
            self.surface.show_error(f"no row {pos}")
            return None
        row_id = find_selection(self.controller.ordered, arg)
        if row_id is None:
            self.surface.show_error(f"no function named {arg!r}")
        return row_id

    def open(self, args: list[str]) -> None:
        if not args:
            self.surface.show_error("usage: o ROW")
            return
        row_id = self._row_id(" ".join(args))
        if row_id is None:
            return
        try:
            self.controller.select(row_id)
        except (SelectionResolutionError, SourceReadError) as exc:
            self.surface.show_error(str(exc))
            return
        self.surface.select_row(row_id)
        self.surface.print_source()

    def _scroll(self, args: list[str], sign: int) -> None:
        lines = int(args[0]) if args and args[0].isdigit() else self.surface.height
        self.surface.scroll_lines(sign * lines)
        self.surface.print_source()

    def scroll_down(self, args: list[str]) -> None:
        self._scroll(args, 1)

    def scroll_up(self, args: list[str]) -> None:
        self._scroll(args, -1)

    def show_list(self, _args: list[str]) -> None:
        self.surface.print_list()

    def help(self, _args: list[str]) -> None:
        self.surface.console.print(HELP, markup=False)

    def handle(self, line: str) -> bool:
        """Run one command line; return ``False`` when the user quits."""
        try:
            words = shlex.split(line)
        except ValueError as exc:
            self.surface.show_error(str(exc))
            return True
        if not words:
            return True
        cmd, args = words[0].lower(), words[1:]
        if cmd in {"q", "quit", "exit"}:
            return False
        handler = self.commands.get(cmd)
        if handler is None:
            self.surface.show_error(f"unknown command {cmd!r} (h for help)")
            return True
        handler(args)
        return True

    def run(self) -> None:
        self.refresh([])
        while True:
            try:
                line = typer.prompt("gocovgui", default="", show_default=False, prompt_suffix="> ")
            except click.exceptions.Abort:
                break
            if not self.handle(line):
                break


def browse_cmd(
    target: TargetArg = None,
    input_: InputOpt = None,
    gocov: GocovOpt = None,
    sort: SortOpt = None,
    order: OrderOpt = None,
    color: ColorOpt = _BOOL_FALSE,
    no_color: NoColorOpt = _BOOL_FALSE,
) -> None:
    """Browse coverage interactively; 'h' lists the commands."""
    opts = ViewOptions(
        target=target,
        input=input_,
        gocov=gocov,
        sort=sort,
        order=order,
        color=color,
        no_color=no_color,
    )
    config = load_config_or_exit()
    out, err = make_consoles(opts)
    try:
        collector = make_collector(opts, config)
    except ToolNotFoundError as exc:
        if not (sys.stdin.isatty() and typer.confirm(f"{exc} Install it now?", default=True)):
            tool_not_found(exc)
        try:
            path = acquire_with_spinner(err)
        except ToolAcquisitionError as acq_exc:
            acquisition_failed(err, acq_exc)
        collector = GocovCollector(path=path, target=opts.target or config.target, timeout=config.timeout)

    surface = ConsoleSurface(out, err, height=config.height)
    controller = Controller(surface, collector, make_session(opts, config))
    logger.debug("starting browser")
    Browser(controller, surface).run()
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("browse")(browse_cmd)


__all__ = ["Browser", "register"]
