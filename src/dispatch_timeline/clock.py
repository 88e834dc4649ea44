"""Injectable "now" and a cancelable periodic tick for live indicators.

Engine code never reads the wall clock directly; it is handed a Clock.
Production wires ``system_clock``, tests use ``fixed_clock``.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

DEFAULT_TICK_SECONDS = 30.0


def system_clock() -> datetime:
    """Naive local wall-clock time."""
    return datetime.now()


def fixed_clock(at: datetime) -> Clock:
    """A clock frozen at ``at``."""
    return lambda: at


class NowTicker:
    """Calls ``callback(now)`` every ``interval`` seconds until stopped.

    Usable as a context manager so the timer cannot outlive its view.
    """

    def __init__(
        self,
        callback: Callable[[datetime], None],
        interval: float = DEFAULT_TICK_SECONDS,
        clock: Clock = system_clock,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.callback = callback
        self.interval = interval
        self.clock = clock
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def __enter__(self) -> NowTicker:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=1)
            self._thread = None

    def tick(self) -> None:
        """Deliver one tick immediately."""
        try:
            self.callback(self.clock())
        except Exception:
            logger.exception("Now-ticker callback failed")

    def _loop(self) -> None:
        self.tick()
        # Wait for either the interval to elapse or an explicit stop.
        while not self._stop.wait(self.interval):
            self.tick()
