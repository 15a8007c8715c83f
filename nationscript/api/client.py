"""Async HTTP client for the NationStates public API.

WHY: Every API call follows the same steps: wait for the rate limiter,
send a GET with the mandatory User-Agent, map HTTP failures to typed
errors, and turn the markup body into a product. This module keeps those
steps in one place so callers (CLI, dump reader, tests) only pick the
query and the response shape.

HOW: Uses httpx.AsyncClient for non-blocking HTTP. NSClient is an async
context manager; enter it to open the connection pool, exit to close it.
Response bodies are streamed chunk by chunk into a MarkupReader, so a
response is never held in memory as a whole.

RULES:
- Always use the async context manager (async with NSClient(...) as client:)
- Every request carries the API version (v=12 by default)
- The User-Agent is mandatory and comes from the caller or NS_USER_AGENT
- HTTP 404 -> EntityNotFoundError, 409 -> LoginError,
  429 -> RatelimitError, any other non-2xx -> APIError
- Transport failures (connect, timeout, broken stream) -> APIError
- A Credential adds login headers and picks up the session pin
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

import httpx

from nationscript import __version__
from nationscript.api.ratelimit import RateLimiter
from nationscript.config import (
    NS_API_URL,
    NS_API_VERSION,
    RATE_LIMIT_ENABLED,
    load_user_agent,
)
from nationscript.core.reader import MarkupReader, Wiring
from nationscript.errors import (
    APIError,
    EntityNotFoundError,
    LoginError,
    RatelimitError,
)
from nationscript.shapes import match_shape
from nationscript.shapes import nation as nation_shape

logger = logging.getLogger(__name__)

# Query parameters naming the entity a request is about, for 404 messages.
_ENTITY_PARAMS = ("nation", "region", "cardid")


def to_id_form(name: str) -> str:
    """Normalize a nation or region name the way the API does.

    "  Testlandia Prime " -> "testlandia_prime"
    """
    return name.strip().replace(" ", "_").lower()


def _join_shards(shards: Iterable[str]) -> str:
    return "+".join(s.strip().lower() for s in shards if s and s.strip())


@dataclass
class Credential:
    """Login for a nation's private shards.

    WHY: Private shards (notices, unread counts, next issue) are only
    sent to a client proving it may act as the nation. The API accepts
    the password, an autologin token or the session pin.

    HOW: headers() builds the X-Password/X-Autologin/X-Pin headers.
    update_from_response() stores the autologin and pin the API returns,
    so later requests reuse the session instead of logging in again.

    RULES:
    - Either password or autologin is required
    - Share one Credential per nation so the session pin stays current
    """

    nation: str
    password: str | None = field(default=None, repr=False)
    autologin: str | None = field(default=None, repr=False)
    pin: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.nation, str) or not self.nation.strip():
            raise ValueError(f"Invalid nation name: {self.nation!r}")
        if not self.password and not self.autologin:
            raise ValueError("Missing required login information")
        self.nation = to_id_form(self.nation)

    def headers(self) -> dict[str, str]:
        headers = {}
        if self.password:
            headers["X-Password"] = self.password
        if self.autologin:
            headers["X-Autologin"] = self.autologin
        if self.pin:
            headers["X-Pin"] = self.pin
        return headers

    def update_from_response(self, headers: Mapping[str, str]) -> None:
        autologin = headers.get("x-autologin")
        pin = headers.get("x-pin")
        if autologin:
            self.autologin = autologin
        if pin:
            self.pin = pin


class NSClient:
    """Async client for the NationStates API.

    RULES:
    - Use as: async with NSClient() as client: ...
    - user_agent defaults to load_user_agent() from .env
    - rate_limiter defaults to a fresh RateLimiter unless NS_RATE_LIMIT=false
    - transport is handed to httpx (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        user_agent: str | None = None,
        base_url: str | None = None,
        api_version: str | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._user_agent = user_agent or load_user_agent()
        self._base_url = base_url or NS_API_URL
        self._api_version = api_version if api_version is not None else NS_API_VERSION
        if rate_limiter is None and RATE_LIMIT_ENABLED:
            rate_limiter = RateLimiter()
        self._rate_limiter = rate_limiter
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def rate_limiter(self) -> RateLimiter | None:
        return self._rate_limiter

    async def __aenter__(self) -> NSClient:
        self._client = httpx.AsyncClient(
            headers={"User-Agent": f"{self._user_agent} nationscript/{__version__}"},
            timeout=httpx.Timeout(60.0, connect=10.0),
            transport=self._transport,
            follow_redirects=True,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def http(self) -> httpx.AsyncClient:
        """Return the active httpx client, raising if not in context manager."""
        if self._client is None:
            raise RuntimeError(
                "NSClient must be used as an async context manager: "
                "async with NSClient() as client: ..."
            )
        return self._client

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def fetch(
        self,
        params: Mapping[str, str],
        wiring: Wiring | None = None,
        credential: Credential | None = None,
    ):
        """Send one API request and return the assembled product.

        Args:
            params: Query parameters (e.g. {"nation": "testlandia", "q": "name"}).
            wiring: Shape wiring for the response. When omitted the root
                tag of the response picks the shape.
            credential: Login sent along for private shards; updated with
                the session data the API returns.

        Returns:
            Whatever the root assembler delivers, usually a dict.

        Raises:
            APIError: The API refused the request or could not be reached.
            MarkupError: The response body is not a well-formed document.
        """
        client = self.http
        query = dict(params)
        if self._api_version:
            query["v"] = self._api_version
        headers = credential.headers() if credential is not None else None

        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        logger.debug("GET %s %s", self._base_url, query)
        try:
            async with client.stream("GET", self._base_url, params=query, headers=headers) as response:
                if self._rate_limiter is not None:
                    self._rate_limiter.update(response.headers)
                if credential is not None:
                    credential.update_from_response(response.headers)
                if response.status_code != 200:
                    await response.aread()
                    raise _error_for(response, query)

                reader = MarkupReader(wiring or match_shape)
                async for chunk in response.aiter_bytes():
                    reader.feed(chunk)
                return reader.close()
        except httpx.HTTPError as e:
            logger.warning("API request to %s failed: %s", self._base_url, e)
            raise APIError(f"Request failed: {e}") from e

    async def nation(self, name: str, *shards: str, credential: Credential | None = None):
        """Fetch a nation. CAPITAL, LEADER and RELIGION honor their custom shards."""
        params = {"nation": to_id_form(name)}
        if shards:
            params["q"] = _join_shards(shards)

        def wiring(tag, attrs):
            if tag == "NATION":
                return nation_shape.create(attrs, shards)
            return match_shape(tag, attrs)

        return await self.fetch(params, wiring, credential)

    async def region(self, name: str, *shards: str):
        params = {"region": to_id_form(name)}
        if shards:
            params["q"] = _join_shards(shards)
        return await self.fetch(params)

    async def world(self, *shards: str):
        if not shards:
            raise ValueError("World requests need at least one shard")
        return await self.fetch({"q": _join_shards(shards)})

    async def wa(self, council: int, *shards: str, resolution_id: int | None = None):
        """Fetch World Assembly data for council 1 (GA) or 2 (SC).

        resolution_id selects a passed resolution for the "resolution"
        shard; without it the API reports the one at vote.
        """
        if council not in (1, 2):
            raise ValueError(f"Invalid World Assembly council: {council!r}")
        params = {"wa": str(council)}
        if shards:
            params["q"] = _join_shards(shards)
        if resolution_id is not None:
            params["id"] = str(resolution_id)
        return await self.fetch(params)

    async def card(self, card_id: int, season: int, *shards: str):
        params = {
            "q": _join_shards(("card",) + shards),
            "cardid": str(card_id),
            "season": str(season),
        }
        return await self.fetch(params)


def _error_for(response: httpx.Response, query: Mapping[str, str]) -> APIError:
    status = response.status_code
    logger.warning("API request failed with HTTP %d", status)
    if status == 404:
        entity = next((query[p] for p in _ENTITY_PARAMS if p in query), "unknown")
        return EntityNotFoundError(entity)
    if status == 409:
        return LoginError("Login rejected; last non-pin login too recent")
    if status == 429:
        retry_after = response.headers.get("retry-after", "0")
        try:
            seconds = float(retry_after)
        except ValueError:
            seconds = 0.0
        return RatelimitError(seconds)
    text = response.text.strip() or response.reason_phrase
    return APIError(f"HTTP {status}: {text}")
