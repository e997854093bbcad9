"""Deferred-call scheduling used by draft auto-save."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class ScheduledHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_after(self, delay_seconds: float, fn: Callable[[], None]) -> ScheduledHandle: ...


class TimerHandle:
    """Cancellation handle around a `threading.Timer`."""

    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.cancel()

    @property
    def active(self) -> bool:
        return self._timer.is_alive()


class ThreadingScheduler:
    """Run a callable once after a delay on a daemon timer thread."""

    def schedule_after(self, delay_seconds: float, fn: Callable[[], None]) -> TimerHandle:
        def _run() -> None:
            try:
                fn()
            except Exception:
                logger.exception("scheduler.callback.failed", extra={"event": "scheduler.callback.failed"})

        timer = threading.Timer(delay_seconds, _run)
        timer.daemon = True
        timer.start()
        return TimerHandle(timer)
