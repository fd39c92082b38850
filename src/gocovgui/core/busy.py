"""Cancellable periodic task driving a "busy" indicator."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Self

from gocovgui._meta import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

DEFAULT_TICK_INTERVAL = 0.1


class BusyTicker:
    """Call *tick* every *interval* seconds on a daemon thread until stopped.

    ``stop`` only sets an event and never blocks. The event is checked at
    every tick boundary, so a tick already past that check when ``stop``
    lands still runs to completion, and none starts after it. Once ``join``
    has returned nothing more runs.
    """

    def __init__(self, tick: Callable[[], None], interval: float = DEFAULT_TICK_INTERVAL) -> None:
        if interval <= 0:
            msg = "interval must be positive"
            raise ValueError(msg)
        self._tick = tick
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            msg = "BusyTicker can only be started once"
            raise RuntimeError(msg)
        self._thread = threading.Thread(target=self._run, name="gocovgui-busy", daemon=True)
        self._thread.start()
        logger.debug("busy ticker started (interval %.3fs)", self._interval)

    def stop(self) -> None:
        if not self._stop.is_set():
            self._stop.set()
            logger.debug("busy ticker stop requested")

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the thread to finish; return whether it has."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            if self._stop.is_set():
                break
            self._tick()

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()
        self.join(self._interval * 10)


__all__ = ["DEFAULT_TICK_INTERVAL", "BusyTicker"]
