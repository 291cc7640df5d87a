from __future__ import annotations

import asyncio
import logging
import math
import threading
import time
from datetime import timedelta

logger = logging.getLogger(__name__)

# Upper bound on how long a waiter sleeps before looking at its cancel_event again.
DEFAULT_CANCEL_POLL_S = 0.05


class InvalidRateLimitConfig(ValueError):
    pass


class AcquireCancelled(RuntimeError):
    """
    Raised to a caller that stopped waiting before it was granted a call.
    """


class AcquireTimeout(AcquireCancelled):
    pass


def _period_to_seconds(period: float | timedelta) -> float:
    if isinstance(period, timedelta):
        return period.total_seconds()
    return float(period)


def _validate_window(limit: int, period: float | timedelta) -> tuple[int, float]:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidRateLimitConfig(f"limit must be an integer, got {limit!r}")
    if limit < 1:
        raise InvalidRateLimitConfig(f"limit must be >= 1, got {limit}")

    try:
        period_s = _period_to_seconds(period)
    except (TypeError, ValueError) as exc:
        raise InvalidRateLimitConfig(f"period must be a number of seconds or a timedelta, got {period!r}") from exc

    if not (period_s > 0 and math.isfinite(period_s)):
        raise InvalidRateLimitConfig(f"period must be > 0, got {period!r}")

    return limit, period_s


class FixedWindowRateLimiter:
    """
    Per-process fixed-window limiter: at most `limit` grants per `period`.

    acquire() blocks the calling thread until a grant is available.

    The window does not slide. A new one starts at the first access that finds
    the previous one expired, so two full bursts may land on either side of a
    boundary (up to 2 * limit grants in a short span).
    """

    def __init__(
            self,
            limit: int,
            period: float | timedelta,
            *,
            cancel_poll_s: float = DEFAULT_CANCEL_POLL_S,
    ) -> None:
        self._limit, self._period_s = _validate_window(limit, period)
        if not cancel_poll_s > 0:
            raise InvalidRateLimitConfig(f"cancel_poll_s must be > 0, got {cancel_poll_s!r}")

        self._cancel_poll_s = cancel_poll_s
        self._cond = threading.Condition(threading.Lock())
        self._count = 0
        self._window_start = time.monotonic()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def period_s(self) -> float:
        return self._period_s

    def acquire(
            self,
            *,
            cancel_event: threading.Event | None = None,
            timeout: float | None = None,
    ) -> None:
        """
        Block until one call is allowed in the current window, then take it.

        - cancel_event: when set while waiting, raise AcquireCancelled
          (noticed within cancel_poll_s).
        - timeout: seconds to wait at most, then raise AcquireTimeout.
          timeout=0 never blocks.

        A caller that gets an exception did not consume a grant.
        """
        deadline = None if timeout is None else time.monotonic() + max(timeout, 0.0)

        with self._cond:
            while True:
                if cancel_event is not None and cancel_event.is_set():
                    raise AcquireCancelled("Cancelled while waiting for a rate limit grant")

                now = time.monotonic()
                elapsed = now - self._window_start

                if elapsed >= self._period_s:
                    logger.debug("Rate limit window reset after %.3fs (count was %d)", elapsed, self._count)
                    self._count = 0
                    self._window_start = now
                    elapsed = 0.0

                if self._count < self._limit:
                    self._count += 1
                    return

                # Window is active and exhausted, so remaining > 0
                wait_s = self._period_s - elapsed

                if deadline is not None:
                    left_s = deadline - now
                    if left_s <= 0:
                        raise AcquireTimeout(f"No rate limit grant within {timeout}s")
                    wait_s = min(wait_s, left_s)

                if cancel_event is not None:
                    wait_s = min(wait_s, self._cancel_poll_s)

                logger.debug(
                    "Rate limit exhausted limit=%d period_s=%s waiting %.3fs", self._limit, self._period_s, wait_s
                )

                # Releases the lock while waiting; every wakeup goes back through the checks above
                self._cond.wait(wait_s)

    def __enter__(self) -> FixedWindowRateLimiter:
        self.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        return None


class AsyncFixedWindowRateLimiter:
    """
    asyncio counterpart of FixedWindowRateLimiter, same window policy.

    Waiting happens in asyncio.sleep() with the lock released, followed by a
    re-check. Task cancellation surfaces as asyncio.CancelledError.
    """

    def __init__(self, limit: int, period: float | timedelta) -> None:
        self._limit, self._period_s = _validate_window(limit, period)
        self._lock: asyncio.Lock | None = None
        self._count = 0
        self._window_start = time.monotonic()

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def period_s(self) -> float:
        return self._period_s

    async def acquire(self, *, timeout: float | None = None) -> None:
        if self._lock is None:
            self._lock = asyncio.Lock()

        deadline = None if timeout is None else time.monotonic() + max(timeout, 0.0)

        while True:
            async with self._lock:
                now = time.monotonic()
                elapsed = now - self._window_start

                if elapsed >= self._period_s:
                    logger.debug("Rate limit window reset after %.3fs (count was %d)", elapsed, self._count)
                    self._count = 0
                    self._window_start = now
                    elapsed = 0.0

                if self._count < self._limit:
                    self._count += 1
                    return

                wait_s = self._period_s - elapsed

                if deadline is not None:
                    left_s = deadline - now
                    if left_s <= 0:
                        raise AcquireTimeout(f"No rate limit grant within {timeout}s")
                    wait_s = min(wait_s, left_s)

            logger.debug(
                "Rate limit exhausted limit=%d period_s=%s waiting %.3fs", self._limit, self._period_s, wait_s
            )
            await asyncio.sleep(wait_s)

    async def __aenter__(self) -> AsyncFixedWindowRateLimiter:
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None
