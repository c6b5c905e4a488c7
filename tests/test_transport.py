from __future__ import annotations

from typing import Any

import aiohttp
import pytest

from pyoptimious._api.parameters import fetch_parameters
from pyoptimious._transport import HttpTransport
from pyoptimious.exceptions import HttpStatusError, MalformedResponseError, NetworkError

URL = "https://config.example.com/parameters"


class _FakeResponse:
    def __init__(self, status: int, text: bytes) -> None:
        self.status = status
        self._text = text

    async def text(self) -> str:
        return self._text.decode("utf-8")

    async def read(self) -> bytes:
        return self._text

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, *, response: _FakeResponse | None = None, exc: Exception | None = None) -> None:
        self._response = response
        self._exc = exc
        self.requests: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append((url, kwargs))
        if self._exc is not None:
            raise self._exc
        assert self._response is not None
        return self._response


@pytest.mark.asyncio
async def test_get_returns_status_and_body() -> None:
    session = _FakeSession(response=_FakeResponse(404, b"not here"))
    transport = HttpTransport(session)  # type: ignore[arg-type]

    response = await transport.get(URL)

    assert response.status == 404
    assert response.body == b"not here"
    url, kwargs = session.requests[0]
    assert url == URL
    assert kwargs["headers"]["accept"] == "application/json"
    assert "timeout" not in kwargs


@pytest.mark.asyncio
async def test_request_timeout_is_forwarded() -> None:
    session = _FakeSession(response=_FakeResponse(200, b"{}"))
    transport = HttpTransport(session, request_timeout=3.0)  # type: ignore[arg-type]

    await transport.get(URL)

    _, kwargs = session.requests[0]
    assert kwargs["timeout"].total == 3.0


@pytest.mark.asyncio
@pytest.mark.parametrize("exc", [aiohttp.ClientConnectionError("refused"), TimeoutError()])
async def test_client_errors_become_network_errors(exc: Exception) -> None:
    transport = HttpTransport(_FakeSession(exc=exc))  # type: ignore[arg-type]

    with pytest.raises(NetworkError) as exc_info:
        await transport.get(URL)

    assert exc_info.value.__cause__ is exc
    assert exc_info.value.url == URL


@pytest.mark.asyncio
async def test_non_utf8_body_is_returned_undecoded() -> None:
    session = _FakeSession(response=_FakeResponse(200, b"\xff\xfe garbage"))
    transport = HttpTransport(session)  # type: ignore[arg-type]

    response = await transport.get(URL)

    assert response.body == b"\xff\xfe garbage"


@pytest.mark.asyncio
async def test_non_utf8_error_body_reports_http_status() -> None:
    session = _FakeSession(response=_FakeResponse(500, b"\xff\xfe garbage"))

    with pytest.raises(HttpStatusError) as exc_info:
        await fetch_parameters(HttpTransport(session), URL)  # type: ignore[arg-type]

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_non_utf8_success_body_is_malformed() -> None:
    session = _FakeSession(response=_FakeResponse(200, b"\xff\xfe garbage"))

    with pytest.raises(MalformedResponseError):
        await fetch_parameters(HttpTransport(session), URL)  # type: ignore[arg-type]
