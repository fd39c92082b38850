"""Package metadata and the shared ``gocovgui`` logger."""

from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("gocovgui")

logger = logging.getLogger("gocovgui")

__all__ = ["__version__", "logger"]
