"""Options and helpers shared by the gocovgui commands."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, NoReturn

import click.utils as click_utils
import typer
from rich.console import Console

from gocovgui._meta import logger
from gocovgui.adapters.collector.gocov import FileCollector, GocovCollector, require_gocov
from gocovgui.cli.exit_codes import (
    EXIT_CONFIG,
    EXIT_DATAERR,
    EXIT_GENERIC,
    EXIT_NOINPUT,
    EXIT_SOFTWARE,
    EXIT_UNAVAILABLE,
)
from gocovgui.core.config import LOG_FORMAT, GocovguiConfig, load_config
from gocovgui.core.model.types import SortDirection, SortKey
from gocovgui.core.session import ViewSession
from gocovgui.errors import (
    ConfigError,
    DecodeError,
    SelectionResolutionError,
    SourceReadError,
    ToolNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from gocovgui.errors import GocovguiError

# --------------------------------------------------------------------------- #
# Reusable parameter declarations                                             #
# --------------------------------------------------------------------------- #
TargetArg = Annotated[
    str | None,
    typer.Argument(help="Package pattern passed to 'gocov test' (e.g. ./...)."),
]
InputOpt = Annotated[
    Path | None,
    typer.Option(
        "--input",
        "-i",
        help="Read gocov JSON from PATH ('-' for stdin) instead of running gocov.",
    ),
]
GocovOpt = Annotated[
    Path | None,
    typer.Option("--gocov", help="Path to the gocov binary."),
]
SortOpt = Annotated[
    SortKey | None,
    typer.Option("--sort", help="Column to order functions by.", case_sensitive=False),
]
OrderOpt = Annotated[
    SortDirection | None,
    typer.Option("--order", help="Ordering direction.", case_sensitive=False),
]
ColorOpt = Annotated[bool, typer.Option("--color", help="Force color output")]
NoColorOpt = Annotated[bool, typer.Option("--no-color", help="Disable color output")]


@dataclass(frozen=True, slots=True)
class ViewOptions:
    """Options common to every command that runs a refresh cycle."""

    target: str | None = None
    input: Path | None = None
    gocov: Path | None = None
    sort: SortKey | None = None
    order: SortDirection | None = None
    color: bool = False
    no_color: bool = False


# --------------------------------------------------------------------------- #
# Runtime                                                                     #
# --------------------------------------------------------------------------- #
def configure_logging(*, quiet: bool, verbose: bool) -> None:
    level = logging.ERROR if quiet else (logging.DEBUG if verbose else logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def load_config_or_exit() -> GocovguiConfig:
    try:
        return load_config(Path.cwd())
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG) from exc


def _is_tty_stdout() -> bool:
    try:
        return bool(getattr(sys.stdout, "isatty", lambda: False)())
    except OSError:
        return False


def resolve_use_color(*, color: bool, no_color: bool, color_allowed: bool) -> bool:
    # CLI flags take precedence over the IO policy default.
    if no_color:
        return False
    if color:
        return True
    return color_allowed


def make_consoles(opts: ViewOptions) -> tuple[Console, Console]:
    """Return ``(stdout, stderr)`` consoles honouring the color flags."""
    color_allowed = _is_tty_stdout() and not click_utils.should_strip_ansi(sys.stdout)
    use_color = resolve_use_color(color=opts.color, no_color=opts.no_color, color_allowed=color_allowed)
    force = True if opts.color else None
    return (
        Console(force_terminal=force, no_color=not use_color, highlight=False),
        Console(stderr=True, force_terminal=force, no_color=not use_color, highlight=False),
    )


def make_session(opts: ViewOptions, config: GocovguiConfig) -> ViewSession:
    return ViewSession(
        sort_key=opts.sort or config.sort,
        sort_direction=opts.order or config.order,
    )


def make_collector(opts: ViewOptions, config: GocovguiConfig) -> Callable[[], bytes]:
    """Pick the collector: a file/stdin reader for ``--input``, else ``gocov test``.

    Raises
    ------
    ToolNotFoundError
        No ``--input`` was given and the tool is nowhere to be found.
    """
    if opts.input is not None:
        logger.debug("reading coverage data from %s", opts.input)
        return FileCollector(opts.input)
    path = require_gocov(opts.gocov or config.gocov)
    return GocovCollector(path=path, target=opts.target or config.target, timeout=config.timeout)


def tool_not_found(exc: ToolNotFoundError) -> NoReturn:
    typer.echo(f"ERROR: gocov not found. {exc}", err=True)
    if exc.searched:
        typer.echo("Searched: " + ", ".join(exc.searched), err=True)
    raise typer.Exit(code=EXIT_UNAVAILABLE) from exc


def exit_code_for(exc: GocovguiError | None) -> int:
    """Map a refresh/render failure onto a process exit status."""
    if isinstance(exc, DecodeError):
        return EXIT_DATAERR
    if isinstance(exc, SourceReadError):
        return EXIT_NOINPUT
    if isinstance(exc, SelectionResolutionError):
        return EXIT_SOFTWARE
    if isinstance(exc, ToolNotFoundError):
        return EXIT_UNAVAILABLE
    if isinstance(exc, ConfigError):
        return EXIT_CONFIG
    return EXIT_GENERIC


__all__ = [
    "ColorOpt",
    "GocovOpt",
    "InputOpt",
    "NoColorOpt",
    "OrderOpt",
    "SortOpt",
    "TargetArg",
    "ViewOptions",
    "configure_logging",
    "exit_code_for",
    "load_config_or_exit",
    "make_collector",
    "make_consoles",
    "make_session",
    "resolve_use_color",
    "tool_not_found",
]
