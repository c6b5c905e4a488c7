"""Parameters endpoint: one GET, JSON decoding and shape validation."""

from __future__ import annotations

import json
import logging
from typing import Any, NoReturn

from pydantic import ValidationError

from pyoptimious._constants import BODY_PREVIEW_CHARS, is_success_status
from pyoptimious._transport import Transport
from pyoptimious.exceptions import HttpStatusError, MalformedResponseError, NetworkError
from pyoptimious.models import ParameterMap, ParametersDocument

_logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> NoReturn:
    # Python's json module accepts NaN/Infinity; JSON does not.
    raise ValueError(f"non-standard JSON constant {name}")


def _as_text(body: str | bytes) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def _preview(body: str | bytes) -> str:
    return _as_text(body)[:BODY_PREVIEW_CHARS]


def parse_parameters(body: str | bytes, *, url: str = "") -> ParameterMap:
    """Decode and validate a parameters document body.

    Raises
    ------
    MalformedResponseError
        If *body* is not UTF-8 JSON, is nested too deeply to decode, or
        lacks a ``parameters`` object of number/string values.
    """
    try:
        text = body.decode("utf-8") if isinstance(body, bytes) else body
        document_raw: Any = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponseError(f"Invalid JSON from {url}: {_preview(body)}", url=url) from exc

    if not isinstance(document_raw, dict) or "parameters" not in document_raw:
        raise MalformedResponseError(f"Missing 'parameters' field from {url}", url=url)
    if not isinstance(document_raw["parameters"], dict):
        raise MalformedResponseError(f"'parameters' from {url} is not an object", url=url)

    try:
        document = ParametersDocument.model_validate(document_raw)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Unsupported parameter value from {url}: {exc.error_count()} validation error(s)",
            url=url,
        ) from exc
    return document.parameters


async def fetch_parameters(transport: Transport, url: str) -> ParameterMap:
    """Perform one round trip to *url* and return the parameter map.

    Raises
    ------
    NetworkError
        If the transport call itself fails.
    HttpStatusError
        If the response status is not 2xx.
    MalformedResponseError
        If the body is not a valid parameters document.
    """
    try:
        response = await transport.get(url)
    except NetworkError:
        raise
    except Exception as exc:
        raise NetworkError(f"GET {url} failed: {exc!r}", url=url) from exc

    if not is_success_status(response.status):
        raise HttpStatusError(
            f"HTTP {response.status} from {url}: {_preview(response.body)}",
            status_code=response.status,
            url=url,
        )

    parameters = parse_parameters(response.body, url=url)
    _logger.debug("Fetched %d parameter(s) from %s", len(parameters), url)
    return parameters
