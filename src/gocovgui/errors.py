"""Centralised exception hierarchy for gocovgui."""

from __future__ import annotations


class GocovguiError(Exception):
    """Base class for all custom gocovgui exceptions."""


class CollectionError(GocovguiError):
    """The coverage collector ran but reported a failure.

    ``detail`` holds the collector's diagnostic output (its stderr) when there
    was any; renderers show it in full, otherwise only the short message.
    """

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail or None


class DecodeError(GocovguiError):
    """Collector output was produced but is not a valid coverage document."""


class SelectionResolutionError(GocovguiError):
    """A row id does not resolve to a function of the current model."""


class SourceReadError(GocovguiError):
    """The source file backing a function could not be read."""


class ToolNotFoundError(GocovguiError):
    """The gocov tool could not be located on disk."""

    def __init__(self, message: str, searched: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.searched = searched


class ToolAcquisitionError(GocovguiError):
    """Installing the gocov tool failed; there is nothing left to do."""

    def __init__(self, message: str, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail or None


class ConfigError(GocovguiError):
    """The project configuration file is malformed."""


__all__ = [
    "CollectionError",
    "ConfigError",
    "DecodeError",
    "GocovguiError",
    "SelectionResolutionError",
    "SourceReadError",
    "ToolAcquisitionError",
    "ToolNotFoundError",
]
