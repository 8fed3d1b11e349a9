"""In-memory fixed-window rate limiting.

State lives in the process that owns the ``RateLimiter`` instance and is
lost on restart. With several worker processes each one counts separately,
so the effective limit is per process.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from django.utils import timezone  # type: ignore

logger = logging.getLogger(__name__)


@dataclass
class RateLimitState:
    count: int
    reset_time: datetime


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining_attempts: int
    reset_time: datetime


class RateLimiter:
    """Counts attempts per identifier inside a fixed window.

    The first attempt opens a window of ``window_minutes``; once
    ``max_attempts`` have been counted further attempts are denied without
    being counted until the window's reset time has passed.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or timezone.now
        self._states: dict[str, RateLimitState] = {}
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._sweeper: Optional[threading.Thread] = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def check(self, identifier: str, max_attempts: int = 3, window_minutes: int = 60) -> RateLimitResult:
        now = self._clock()
        with self._lock:
            state = self._states.get(identifier)

            if state is None or now > state.reset_time:
                reset_time = now + timedelta(minutes=window_minutes)
                self._states[identifier] = RateLimitState(count=1, reset_time=reset_time)
                return RateLimitResult(True, max_attempts - 1, reset_time)

            if state.count >= max_attempts:
                return RateLimitResult(False, 0, state.reset_time)

            state.count += 1
            return RateLimitResult(True, max_attempts - state.count, state.reset_time)

    def sweep(self) -> int:
        """Drop states whose window has ended; returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [key for key, state in self._states.items() if now > state.reset_time]
            for key in expired:
                del self._states[key]
        if expired:
            logger.debug("Swept %s expired rate-limit entries", len(expired))
        return len(expired)

    def start_sweeper(self, interval_seconds: float = 300) -> None:
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop_event = threading.Event()
        self._sweeper = threading.Thread(
            target=self._sweep_forever,
            args=(self._stop_event, interval_seconds),
            name="rate-limit-sweeper",
            daemon=True,
        )
        self._sweeper.start()

    def stop_sweeper(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._sweeper is not None:
            self._sweeper.join(timeout=1)
        self._sweeper = None
        self._stop_event = None

    def _sweep_forever(self, stop_event: threading.Event, interval_seconds: float) -> None:
        while not stop_event.wait(interval_seconds):
            self.sweep()
