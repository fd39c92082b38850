from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.spinner import Spinner
from rich.text import Text

from gocovgui.adapters.collector.gocov import GOCOV_PACKAGE, acquire_gocov
from gocovgui.cli.exit_codes import EXIT_OK, EXIT_UNAVAILABLE
from gocovgui.core.busy import BusyTicker
from gocovgui.errors import ToolAcquisitionError

if TYPE_CHECKING:
    from pathlib import Path


def acquire_with_spinner(console: Console) -> Path:
    """Install gocov while a spinner is kept moving by a :class:`BusyTicker`."""
    spinner = Spinner("dots", text=f"Installing {GOCOV_PACKAGE} ...")
    with Live(spinner, console=console, auto_refresh=False, transient=True) as live, BusyTicker(live.refresh):
        return acquire_gocov()


def acquisition_failed(console: Console, exc: ToolAcquisitionError) -> NoReturn:
    """Report a failed installation and end the process."""
    console.print(Text(f"FATAL: {exc}", style="bold red"))
    if exc.detail:
        console.print(Panel(Text(exc.detail.rstrip()), title="go install output", border_style="red"))
    raise typer.Exit(code=EXIT_UNAVAILABLE) from exc


def install_cmd() -> None:
    """Fetch the gocov tool with 'go install'."""
    err = Console(stderr=True)
    try:
        path = acquire_with_spinner(err)
    except ToolAcquisitionError as exc:
        acquisition_failed(err, exc)
    typer.echo(f"gocov installed: {path}")
    raise typer.Exit(code=EXIT_OK)


def register(app: typer.Typer) -> None:
    app.command("install")(install_cmd)


__all__ = ["acquire_with_spinner", "acquisition_failed", "register"]
