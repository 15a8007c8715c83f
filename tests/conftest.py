"""Shared test fixtures for the nationscript test suite.

WHY: Assembler tests drive the same open/text/close event sequences over
and over, and API tests all need a client talking to an in-process fake
of the NationStates server. Centralizing both keeps the tests short.

HOW: drive() replays a compact event list against an assembler.
FakeClock stands in for time.monotonic/asyncio.sleep so rate limiting
never waits for real. make_client() builds an NSClient over
httpx.MockTransport with a fixed user agent and API version.

RULES:
- No test touches the network
- Event lists use ("open", name[, attrs]), ("text", s), ("cdata", s), ("close", name)
"""

from __future__ import annotations

import gzip
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from nationscript.api.client import NSClient
from nationscript.api.ratelimit import RateLimiter
from nationscript.core.assembler import Assembler

USER_AGENT = "pytest-agent"

Event = tuple[Any, ...]


def _drive(assembler: Assembler, events: list[Event]) -> Assembler:
    for event in events:
        kind = event[0]
        if kind == "open":
            attrs: dict[str, str] = event[2] if len(event) > 2 else {}
            assembler.on_open(event[1], attrs)
        elif kind == "close":
            assembler.on_close(event[1])
        elif kind == "text":
            assembler.on_text(event[1])
        elif kind == "cdata":
            assembler.on_cdata(event[1])
        else:
            raise ValueError(f"Unknown event kind: {kind}")
    return assembler


class FakeClock:
    """Monotonic clock whose sleep() advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def drive() -> Callable[[Assembler, list[Event]], Assembler]:
    """Replay an event list against an assembler and return it."""
    return _drive


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_client(clock):
    """Factory for NSClient instances served by an httpx.MockTransport handler."""

    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> NSClient:
        kwargs.setdefault("user_agent", USER_AGENT)
        kwargs.setdefault("api_version", "12")
        kwargs.setdefault(
            "rate_limiter", RateLimiter(clock=clock, sleep=clock.sleep)
        )
        return NSClient(transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def gzipped() -> Callable[[str], bytes]:
    """Compress a markup string the way the dump server serves it."""

    def _gzip(markup: str) -> bytes:
        return gzip.compress(markup.encode("utf-8"))

    return _gzip
