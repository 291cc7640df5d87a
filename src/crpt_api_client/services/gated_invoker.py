from __future__ import annotations

from typing import Awaitable, Callable, Generic, TypeVar

from crpt_api_client.services.rate_limiter import AsyncFixedWindowRateLimiter, FixedWindowRateLimiter

T = TypeVar("T")


class GatedInvoker(Generic[T]):
    """
    Runs an action only after the limiter granted it a slot.

    The action runs outside the limiter lock. Its result or exception is passed
    through untouched, and a failed action still used up its grant.
    """

    def __init__(self, limiter: FixedWindowRateLimiter) -> None:
        self._limiter = limiter

    @property
    def limiter(self) -> FixedWindowRateLimiter:
        return self._limiter

    def invoke(self, action: Callable[[], T]) -> T:
        self._limiter.acquire()
        return action()


class AsyncGatedInvoker(Generic[T]):
    def __init__(self, limiter: AsyncFixedWindowRateLimiter) -> None:
        self._limiter = limiter

    @property
    def limiter(self) -> AsyncFixedWindowRateLimiter:
        return self._limiter

    async def invoke(self, action: Callable[[], Awaitable[T]]) -> T:
        await self._limiter.acquire()
        return await action()
