"""Headless gravity driver.

The engine never owns a timer.  :class:`TickDriver` plays the part of the
periodic timer: it accumulates elapsed time and fires :meth:`Session.tick`
whenever a full interval has passed, reading the session's interval again
after every tick because line clears shorten it.

Input and timer events may arrive on different threads, so every call into the
session is made while holding a single lock.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .session import Command, Session


LOGGER = logging.getLogger(__name__)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TickDriver:
    """Drive a :class:`Session` from elapsed wall-clock or simulated time."""

    def __init__(
        self,
        session: Session,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.session = session
        self._clock = clock or _monotonic_ms
        self._lock = threading.RLock()
        self.drop_accum = 0.0
        self.last_ts: Optional[float] = None

    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` of time and return how many ticks ran."""

        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must not be negative")
        ticks = 0
        with self._lock:
            if self.session.is_paused or self.session.is_over:
                return 0
            self.drop_accum += elapsed_ms
            delay = self.session.tick_interval
            while self.drop_accum >= delay:
                self.drop_accum -= delay
                delay = self.session.tick()
                ticks += 1
                if self.session.is_over:
                    LOGGER.info("Session ended after %d tick(s)", ticks)
                    self.drop_accum = 0.0
                    break
        return ticks

    def poll(self) -> int:
        """Advance by the time elapsed on the clock since the previous poll."""

        with self._lock:
            # Read under the lock so timestamps are consumed in clock order.
            now = self._clock()
            if self.last_ts is None:
                self.last_ts = now
            elapsed = now - self.last_ts
            self.last_ts = now
            return self.advance(elapsed)

    def command(self, cmd: Command) -> bool:
        with self._lock:
            return self.session.apply_command(cmd)

    def pause(self) -> None:
        with self._lock:
            self.session.pause()

    def resume(self) -> None:
        with self._lock:
            self.session.resume()
            # Time spent paused must not turn into a burst of ticks.
            self.last_ts = None

    def reset(self) -> None:
        """Reset the session and the timing accumulators."""

        with self._lock:
            self.session.reset()
            self.drop_accum = 0.0
            self.last_ts = None


__all__ = ["TickDriver"]
