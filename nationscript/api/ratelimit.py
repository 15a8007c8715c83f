"""Client-side enforcement of the NationStates API rate limit.

WHY: The API allows 50 requests per rolling 30 second window and locks
out clients that exceed it. Waiting locally before a request is cheaper
than recovering from a 429 response.

HOW: A fixed window counter. The first request opens a window of
period_s + buffer_s; further requests are admitted until amount is
reached, after which acquire() sleeps until the window expires. Response
headers (RateLimit-Limit, RateLimit-Remaining, RateLimit-Reset,
Retry-After) correct the local view whenever the server reports one.

RULES:
- One RateLimiter per client; no module-level state
- acquire() calls are serialized through an asyncio.Lock
- amount defaults to 49, keeping one request in reserve
- clock and sleep are injectable so tests never wait for real
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping

from nationscript.config import (
    RATE_LIMIT_AMOUNT,
    RATE_LIMIT_BUFFER_S,
    RATE_LIMIT_PERIOD_S,
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Admits requests at the pace the API allows."""

    def __init__(
        self,
        amount: int = RATE_LIMIT_AMOUNT,
        period_s: float = RATE_LIMIT_PERIOD_S,
        buffer_s: float = RATE_LIMIT_BUFFER_S,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if amount < 1:
            raise ValueError(f"Rate limit amount must be positive, got {amount}")
        self.amount = amount
        self.period_s = period_s
        self.buffer_s = buffer_s
        self._clock = clock
        self._sleep = sleep
        self._sent = 0
        self._expires = 0.0
        self._retry_at = 0.0
        self._lock = asyncio.Lock()

    @property
    def sent(self) -> int:
        """Requests admitted in the current window."""
        return self._sent

    async def acquire(self) -> None:
        """Wait until one more request may be sent, then count it."""
        async with self._lock:
            while True:
                now = self._clock()
                if now < self._retry_at:
                    wait = self._retry_at - now
                    logger.info("API asked to retry later; waiting %.1f s", wait)
                    await self._sleep(wait)
                    continue
                if now >= self._expires:
                    self._expires = now + self.period_s + self.buffer_s
                    self._sent = 1
                    return
                if self._sent < self.amount:
                    self._sent += 1
                    return
                wait = self._expires - now
                logger.info("Rate limit window full; waiting %.1f s", wait)
                await self._sleep(wait)

    def update(self, headers: Mapping[str, str]) -> None:
        """Adopt the server's view of the current window from response headers."""
        now = self._clock()
        retry_after = _header_number(headers, "retry-after")
        if retry_after is not None:
            self._retry_at = max(self._retry_at, now + retry_after + self.buffer_s)

        limit = _header_number(headers, "ratelimit-limit")
        if limit is None:
            return
        self.amount = max(1, int(limit) - 1)

        remaining = _header_number(headers, "ratelimit-remaining")
        if remaining is None:
            return
        self._sent = max(self._sent, int(limit - remaining))

        reset = _header_number(headers, "ratelimit-reset")
        if reset is None:
            return
        self._expires = max(self._expires, now + reset + self.buffer_s)


def _header_number(headers: Mapping[str, str], name: str) -> float | None:
    value = headers.get(name)
    if value is None:
        value = headers.get(name.title())
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring malformed %s header: %r", name, value)
        return None
