"""HTTP transport used to retrieve the parameters document."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import aiohttp

from pyoptimious._constants import ACCEPT, USER_AGENT
from pyoptimious.exceptions import NetworkError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and body of one HTTP round trip.

    ``body`` is the raw payload; custom transports may pass already-decoded
    text instead.  Decoding happens in the fetcher, after the status check.
    """

    status: int
    body: str | bytes


class Transport(Protocol):
    """Structural transport interface used by the fetcher.

    Any object with a matching ``get`` coroutine can be injected into the
    client, which keeps test doubles trivial while the production
    implementation (`HttpTransport`) stays concrete.
    """

    async def get(self, url: str) -> TransportResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport issuing plain ``GET`` requests."""

    def __init__(
        self,
        http_session: aiohttp.ClientSession,
        *,
        request_timeout: float | None = None,
    ) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=request_timeout) if request_timeout is not None else None

    async def get(self, url: str) -> TransportResponse:
        headers = {
            "accept": ACCEPT,
            "user-agent": USER_AGENT,
        }

        _logger.debug("GET %s", url)

        kwargs: dict[str, Any] = {"headers": headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        try:
            async with self._http.get(url, **kwargs) as resp:
                raw = await resp.read()
                return TransportResponse(status=resp.status, body=raw)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise NetworkError(f"GET {url} failed: {exc!r}", url=url) from exc
