"""
Domain: Rate limit window entry.

One entry exists per client key. An entry covers a fixed window that starts
at the first request seen after the previous window elapsed.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RateLimitEntry:
    """
    Counter for a single fixed window.

    Mutable on purpose: the limiter increments `count` in place while holding
    its lock.
    """

    window_start: float  # epoch milliseconds
    count: int = 1

    def is_expired(self, now: float, window_ms: float) -> bool:
        """Check whether the window this entry counts for has elapsed."""
        return now - self.window_start >= window_ms
