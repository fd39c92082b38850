"""Locating, running and installing the ``gocov`` coverage tool.

The viewer core only needs a callable returning the JSON document of
``gocov test``; the collectors here provide it either by running the tool or
by reading output that was produced earlier.
"""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from gocovgui._meta import logger
from gocovgui.errors import CollectionError, ToolAcquisitionError, ToolNotFoundError

if TYPE_CHECKING:
    from collections.abc import Mapping

GOCOV_PACKAGE = "github.com/axw/gocov/gocov@latest"
_GO_ENV_TIMEOUT = 10.0

NOT_FOUND_MESSAGE = (
    "gocovgui failed to find the gocov tool. It checks the following paths: "
    "$PATH, $GOROOT/bin, $GOBIN and $GOPATH/bin. "
    'Run "gocovgui install" to fetch it with "go install".'
)


def _exe(name: str) -> str:
    return f"{name}.exe" if os.name == "nt" else name


def _text(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


# --------------------------- Discovery ----------------------------------------
def _go_env(var: str, env: Mapping[str, str]) -> str | None:
    go = shutil.which(_exe("go"), path=env.get("PATH"))
    if go is None:
        return None
    try:
        proc = subprocess.run(
            [go, "env", var],
            capture_output=True,
            text=True,
            check=False,
            timeout=_GO_ENV_TIMEOUT,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    value = proc.stdout.strip()
    return value if proc.returncode == 0 and value else None


def candidate_paths(env: Mapping[str, str] | None = None) -> list[Path]:
    """Locations checked for the tool besides ``$PATH``, in search order."""
    env = os.environ if env is None else env
    name = _exe("gocov")
    out: list[Path] = []

    goroots = [_go_env("GOROOT", env), env.get("GOROOT")]
    out.extend(Path(root) / "bin" / name for root in goroots if root)

    gobin = env.get("GOBIN")
    if gobin:
        out.append(Path(gobin) / name)

    gopath = env.get("GOPATH") or str(Path.home() / "go")
    out.extend(Path(p) / "bin" / name for p in gopath.split(os.pathsep) if p)

    unique: list[Path] = []
    for p in out:
        if p not in unique:
            unique.append(p)
    return unique


def find_gocov(env: Mapping[str, str] | None = None) -> Path | None:
    env = os.environ if env is None else env
    on_path = shutil.which(_exe("gocov"), path=env.get("PATH"))
    if on_path:
        logger.debug("found gocov on PATH: %s", on_path)
        return Path(on_path)
    for candidate in candidate_paths(env):
        if candidate.is_file():
            logger.debug("found gocov at %s", candidate)
            return candidate
        logger.debug("no gocov at %s", candidate)
    return None


def require_gocov(explicit: Path | None = None, env: Mapping[str, str] | None = None) -> Path:
    """Return the tool to run, raising :class:`ToolNotFoundError` when there is none."""
    if explicit is not None:
        if explicit.is_file():
            return explicit
        msg = f"gocov not found at {explicit}"
        raise ToolNotFoundError(msg, searched=(str(explicit),))
    found = find_gocov(env)
    if found is None:
        searched = ("$PATH", *(str(p) for p in candidate_paths(env)))
        raise ToolNotFoundError(NOT_FOUND_MESSAGE, searched=searched)
    return found


# --------------------------- Collectors ---------------------------------------
@dataclass(frozen=True, slots=True)
class GocovCollector:
    """Run ``gocov test [target]`` and return its standard output."""

    path: Path
    target: str | None = None
    timeout: float | None = None
    cwd: Path | None = None

    def command(self) -> list[str]:
        cmd = [str(self.path), "test"]
        if self.target:
            cmd.append(self.target)
        return cmd

    def __call__(self) -> bytes:
        cmd = self.command()
        logger.info("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                check=False,
                timeout=self.timeout,
                cwd=self.cwd,
            )
        except subprocess.TimeoutExpired as exc:
            msg = f"gocov test did not finish within {self.timeout:g} seconds"
            raise CollectionError(msg, detail=_text(exc.stderr)) from exc
        except OSError as exc:
            msg = f"failed to run {cmd[0]}: {exc}"
            raise CollectionError(msg) from exc

        logger.info("gocov exited with status %d", proc.returncode)
        if proc.returncode != 0:
            msg = f"gocov test failed (exit status {proc.returncode})"
            raise CollectionError(msg, detail=_text(proc.stderr))
        return proc.stdout


@dataclass(frozen=True, slots=True)
class FileCollector:
    """Read previously produced ``gocov`` JSON from a file, or stdin for ``-``."""

    path: Path

    def __call__(self) -> bytes:
        if self.path == Path("-"):
            return sys.stdin.buffer.read()
        try:
            return self.path.read_bytes()
        except OSError as exc:
            msg = f"cannot read coverage data: {exc}"
            raise CollectionError(msg) from exc


# --------------------------- Acquisition --------------------------------------
def acquire_gocov(env: Mapping[str, str] | None = None) -> Path:
    """Install the tool with ``go install`` and locate it again."""
    env = os.environ if env is None else env
    go = shutil.which(_exe("go"), path=env.get("PATH"))
    if go is None:
        msg = "the go tool is not installed, cannot fetch gocov"
        raise ToolAcquisitionError(msg)

    cmd = [go, "install", GOCOV_PACKAGE]
    logger.info("running %s", " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        msg = f"failed to run {go}: {exc}"
        raise ToolAcquisitionError(msg) from exc
    if proc.returncode != 0:
        msg = f"go install failed (exit status {proc.returncode})"
        raise ToolAcquisitionError(msg, detail=proc.stderr)

    found = find_gocov(env)
    if found is None:
        msg = 'Unable to find the gocov binary after running "go install"'
        raise ToolAcquisitionError(msg)
    return found


__all__ = [
    "GOCOV_PACKAGE",
    "NOT_FOUND_MESSAGE",
    "FileCollector",
    "GocovCollector",
    "acquire_gocov",
    "candidate_paths",
    "find_gocov",
    "require_gocov",
]
