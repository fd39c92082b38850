from __future__ import annotations

from typing import Annotated

import typer

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
    exit_code_for,
    load_config_or_exit,
    make_collector,
    make_consoles,
    make_session,
    tool_not_found,
)
from gocovgui.cli.exit_codes import EXIT_NOINPUT, EXIT_OK
from gocovgui.core.controller import Controller
from gocovgui.errors import SourceReadError, ToolNotFoundError

_BOOL_FALSE = False


def _controller(opts: ViewOptions, *, height: int | None = None) -> tuple[Controller, ConsoleSurface]:
    config = load_config_or_exit()
    try:
        collector = make_collector(opts, config)
    except ToolNotFoundError as exc:
        tool_not_found(exc)
    out, err = make_consoles(opts)
    surface = ConsoleSurface(out, err, height=height or config.height)
    return Controller(surface, collector, make_session(opts, config)), surface


def report_cmd(
    target: TargetArg = None,
    input_: InputOpt = None,
    gocov: GocovOpt = None,
    sort: SortOpt = None,
    order: OrderOpt = None,
    color: ColorOpt = _BOOL_FALSE,
    no_color: NoColorOpt = _BOOL_FALSE,
) -> None:
    """Run gocov and print per-function coverage."""
    opts = ViewOptions(
        target=target,
        input=input_,
        gocov=gocov,
        sort=sort,
        order=order,
        color=color,
        no_color=no_color,
    )
    controller, surface = _controller(opts)
    if not controller.refresh(render_selection=False):
        raise typer.Exit(code=exit_code_for(controller.last_error))
    surface.print_list()
    raise typer.Exit(code=EXIT_OK)


def show_cmd(
    name: Annotated[str, typer.Argument(help="Function to show, as 'package.Function'.")],
    target: TargetArg = None,
    input_: InputOpt = None,
    gocov: GocovOpt = None,
    height: Annotated[
        int | None,
        typer.Option("--height", help="Source lines to show.", min=1),
    ] = None,
    scroll: Annotated[
        float,
        typer.Option("--scroll", help="Fraction of the body scrolled past (0..1).", min=0.0, max=1.0),
    ] = 0.0,
    color: ColorOpt = _BOOL_FALSE,
    no_color: NoColorOpt = _BOOL_FALSE,
) -> None:
    """Print a function's source with its uncovered statements highlighted."""
    opts = ViewOptions(target=target, input=input_, gocov=gocov, color=color, no_color=no_color)
    controller, surface = _controller(opts, height=height)
    controller.session.previous_selection_name = name

    if not controller.refresh(render_selection=False):
        raise typer.Exit(code=exit_code_for(controller.last_error))
    if controller.selected is None or controller.selected.name != name:
        typer.echo(f"ERROR: no function named {name!r}", err=True)
        raise typer.Exit(code=EXIT_NOINPUT)

    try:
        controller.select(controller.selected.id)
    except SourceReadError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=exit_code_for(exc)) from exc

    if scroll:
        surface.scroll_to(scroll)
    surface.print_source()
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("report")(report_cmd)
    app.command("show")(show_cmd)


__all__ = ["register"]
