from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Protocol

from lms_admin_console.app.infrastructure.logging.logger import get_logger

logger = get_logger("lms_admin_console.auto_refresh")


class TimerLike(Protocol):
    daemon: bool

    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerLike]


def default_timer_factory(interval: float, callback: Callable[[], None]) -> TimerLike:
    return threading.Timer(interval, callback)


class AutoRefresher:
    """Re-runs ``refresh`` every ``interval_seconds`` until ``stop``."""

    def __init__(
        self,
        refresh: Callable[[], Any],
        interval_seconds: float,
        timer_factory: TimerFactory = default_timer_factory,
    ) -> None:
        self._refresh = refresh
        self.interval_seconds = interval_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: TimerLike | None = None
        self._active = False
        self.ticks = 0

    @property
    def active(self) -> bool:
        return self._active

    def start(self) -> None:
        with self._lock:
            if self._active:
                return
            self._active = True
            self._schedule()

    def stop(self) -> None:
        with self._lock:
            self._active = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _schedule(self) -> None:
        timer = self._timer_factory(self.interval_seconds, self._tick)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _tick(self) -> None:
        with self._lock:
            if not self._active:
                return
        self.ticks += 1
        try:
            self._refresh()
        except Exception:  # noqa: BLE001
            logger.exception("auto-refresh failed")
        with self._lock:
            if self._active:
                self._schedule()
