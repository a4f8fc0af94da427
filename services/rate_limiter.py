"""
Fixed-window rate limiter keyed by client address.

Handles:
- Counting requests per client within a 10 minute window
- Rejecting the 6th and later requests inside a window
- Evicting entries whose window has elapsed so the table does not grow forever

A single instance is built at startup and shared by every request. FastAPI
runs sync endpoints on a thread pool, so the check-and-increment is guarded
by a lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from domain.rate_limit import RateLimitEntry
from domain.time import now_epoch_ms

logger = logging.getLogger(__name__)

RATE_LIMIT_WINDOW_MS: int = 10 * 60 * 1000
RATE_LIMIT_MAX: int = 5


class RateLimiter:
    """
    In-process fixed window counter.

    Args:
        window_ms: Window length in milliseconds (default: 10 minutes)
        max_requests: Requests allowed per window (default: 5)
        clock: Returns the current time in epoch milliseconds
        sweep_interval_ms: Minimum gap between automatic sweeps
            (default: one window)
    """

    def __init__(
        self,
        window_ms: float = RATE_LIMIT_WINDOW_MS,
        max_requests: int = RATE_LIMIT_MAX,
        clock: Callable[[], float] = now_epoch_ms,
        sweep_interval_ms: Optional[float] = None,
    ) -> None:
        if window_ms <= 0:
            raise ValueError("window_ms must be > 0")
        if max_requests < 1:
            raise ValueError("max_requests must be >= 1")

        self.window_ms = window_ms
        self.max_requests = max_requests
        self._clock = clock
        self._sweep_interval_ms = window_ms if sweep_interval_ms is None else sweep_interval_ms
        self._entries: Dict[str, RateLimitEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def is_rate_limited(self, client_key: str) -> bool:
        """
        Count a request from `client_key` and report whether it is over the limit.

        Returns:
            False for the first `max_requests` requests in a window, True after.
        """
        now = self._clock()

        with self._lock:
            if now - self._last_sweep >= self._sweep_interval_ms:
                self._sweep_locked(now)

            entry = self._entries.get(client_key)
            if entry is None or entry.is_expired(now, self.window_ms):
                self._entries[client_key] = RateLimitEntry(window_start=now, count=1)
                return False

            entry.count += 1
            count = entry.count

        limited = count > self.max_requests
        if limited:
            logger.warning(
                "Rate limit exceeded for client %s (%d requests in window)",
                client_key,
                count,
            )
        return limited

    def sweep(self, now: Optional[float] = None) -> int:
        """
        Drop entries whose window has elapsed.

        Returns:
            Number of entries removed
        """
        with self._lock:
            return self._sweep_locked(self._clock() if now is None else now)

    def _sweep_locked(self, now: float) -> int:
        expired = [
            key for key, entry in self._entries.items()
            if entry.is_expired(now, self.window_ms)
        ]
        for key in expired:
            del self._entries[key]
        self._last_sweep = now
        if expired:
            logger.debug("Evicted %d expired rate limit entries", len(expired))
        return len(expired)


__all__ = ["RATE_LIMIT_MAX", "RATE_LIMIT_WINDOW_MS", "RateLimiter"]
