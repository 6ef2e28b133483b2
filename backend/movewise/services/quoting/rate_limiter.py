"""Per-provider fixed-window rate limiter.

Each provider gets its own window: at most `request_limit` requests until
`window_duration` has elapsed since the window opened, then the count resets.

The counters are the only state shared between concurrent aggregations, so
every read-modify-write of a window happens under that provider's lock. The
critical section never awaits, which lets a plain threading.Lock cover both
tasks on one event loop and callers on other threads.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from movewise.exceptions import RateLimitExceeded
from movewise.services.quoting.config import RateLimitConfig


@dataclass
class RateLimitState:
    request_count: int
    window_started_at: float
    window_limit: int
    window_seconds: float


class RateLimiter:
    """Fixed-window request counter keyed by provider id."""

    def __init__(
        self,
        limits: dict[str, RateLimitConfig],
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        now = clock()
        self._states: dict[str, RateLimitState] = {
            provider_id: RateLimitState(
                request_count=0,
                window_started_at=now,
                window_limit=cfg.request_limit,
                window_seconds=cfg.window_seconds,
            )
            for provider_id, cfg in limits.items()
        }
        self._locks: dict[str, threading.Lock] = {pid: threading.Lock() for pid in self._states}

    def try_consume(self, provider_id: str) -> bool:
        """Count one request against the provider. False if the window is full."""
        state = self._states.get(provider_id)
        if state is None:
            raise KeyError(f"No rate limit configured for provider: {provider_id}")

        with self._locks[provider_id]:
            now = self._clock()
            if now - state.window_started_at > state.window_seconds:
                state.request_count = 0
                state.window_started_at = now

            if state.request_count < state.window_limit:
                state.request_count += 1
                return True
            return False

    def consume(self, provider_id: str) -> None:
        """Like try_consume, but raises RateLimitExceeded on rejection."""
        if not self.try_consume(provider_id):
            raise RateLimitExceeded(provider_id, self._states[provider_id].window_limit)

    def reset(self, provider_id: str | None = None) -> None:
        targets = [provider_id] if provider_id else list(self._states)
        for pid in targets:
            with self._locks[pid]:
                self._states[pid].request_count = 0
                self._states[pid].window_started_at = self._clock()

    def get_usage_stats(self) -> dict[str, dict]:
        """Current usage per provider, for monitoring."""
        stats = {}
        for provider_id, state in self._states.items():
            with self._locks[provider_id]:
                now = self._clock()
                expired = now - state.window_started_at > state.window_seconds
                used = 0 if expired else state.request_count
                reset_in = 0.0 if expired else state.window_seconds - (now - state.window_started_at)
                stats[provider_id] = {
                    "requests": used,
                    "limit": state.window_limit,
                    "remaining": max(0, state.window_limit - used),
                    "reset_in_seconds": round(reset_in, 1),
                }
        return stats
