"""Central configuration and constants for ``gocovgui``.

Projects may keep defaults in a ``.gocovgui.toml`` (or ``gocovgui.toml``)
file anywhere between the working directory and the project root, i.e. the
nearest directory holding ``go.mod`` or ``.git``::

    gocov = "/opt/go/bin/gocov"
    target = "./..."
    sort = "file"
    order = "asc"
    timeout = 300
    height = 60

Command line options take precedence over the file.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from gocovgui._meta import logger
from gocovgui.core.model.types import SortDirection, SortKey
from gocovgui.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

# Default logging format used by the CLI entry point.
LOG_FORMAT = "%(levelname)s: %(message)s"

CONFIG_FILENAMES = (".gocovgui.toml", "gocovgui.toml")
_ROOT_MARKERS = ("go.mod", ".git")

# Lines of source shown at once by console surfaces.
DEFAULT_VIEW_HEIGHT = 40

_KNOWN_KEYS = frozenset({"gocov", "target", "sort", "order", "timeout", "height"})

E = TypeVar("E", SortKey, SortDirection)


@dataclass(frozen=True, slots=True)
class GocovguiConfig:
    gocov: Path | None = None
    target: str | None = None
    sort: SortKey = SortKey.COVERAGE
    order: SortDirection = SortDirection.DESCENDING
    timeout: float | None = None
    height: int = DEFAULT_VIEW_HEIGHT
    source: Path | None = None


def find_project_root(start: Path) -> Path:
    """Heuristic project root finder: walks upward looking for go.mod or .git."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        if any((p / marker).exists() for marker in _ROOT_MARKERS):
            return p
    return cur


def find_config_file(cwd: Path) -> Path | None:
    root = find_project_root(cwd)
    cur = cwd.resolve()
    for p in (cur, *cur.parents):
        for name in CONFIG_FILENAMES:
            candidate = p / name
            if candidate.is_file():
                return candidate
        if p == root:
            break
    return None


def _enum_value(enum: type[E], key: str, value: object, source: Path) -> E:
    try:
        return enum(str(value).lower())
    except ValueError as exc:
        choices = ", ".join(m.value for m in enum)
        msg = f"{source}: invalid {key} {value!r}; expected one of: {choices}"
        raise ConfigError(msg) from exc


def _resolve_tool_path(value: str, source: Path) -> Path:
    path = Path(value.strip()).expanduser()
    return path if path.is_absolute() else source.parent / path


def parse_config(data: Mapping[str, object], *, source: Path) -> GocovguiConfig:
    """Validate a decoded configuration table."""
    for key in sorted(set(data) - _KNOWN_KEYS):
        logger.warning("%s: ignoring unknown key %r", source, key)

    gocov = data.get("gocov")
    if gocov is not None and not (isinstance(gocov, str) and gocov.strip()):
        msg = f"{source}: gocov must be a non-empty string"
        raise ConfigError(msg)

    target = data.get("target")
    if target is not None and not isinstance(target, str):
        msg = f"{source}: target must be a string"
        raise ConfigError(msg)

    timeout = data.get("timeout")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0
    ):
        msg = f"{source}: timeout must be a positive number of seconds"
        raise ConfigError(msg)

    height = data.get("height", DEFAULT_VIEW_HEIGHT)
    if isinstance(height, bool) or not isinstance(height, int) or height < 1:
        msg = f"{source}: height must be a positive integer"
        raise ConfigError(msg)

    return GocovguiConfig(
        gocov=_resolve_tool_path(gocov, source) if isinstance(gocov, str) else None,
        target=target or None,
        sort=_enum_value(SortKey, "sort", data["sort"], source) if "sort" in data else SortKey.COVERAGE,
        order=(
            _enum_value(SortDirection, "order", data["order"], source)
            if "order" in data
            else SortDirection.DESCENDING
        ),
        timeout=float(timeout) if timeout is not None else None,
        height=height,
        source=source,
    )


def load_config(cwd: Path | None = None) -> GocovguiConfig:
    """Load the nearest configuration file, or the defaults when there is none."""
    path = find_config_file(cwd or Path.cwd())
    if path is None:
        return GocovguiConfig()
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"{path}: cannot read configuration: {exc}"
        raise ConfigError(msg) from exc
    except (tomllib.TOMLDecodeError, UnicodeError) as exc:
        msg = f"{path}: invalid TOML: {exc}"
        raise ConfigError(msg) from exc
    logger.debug("loaded configuration from %s", path)
    return parse_config(data, source=path)


__all__ = [
    "CONFIG_FILENAMES",
    "DEFAULT_VIEW_HEIGHT",
    "LOG_FORMAT",
    "GocovguiConfig",
    "find_config_file",
    "find_project_root",
    "load_config",
    "parse_config",
]
