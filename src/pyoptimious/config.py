"""Client configuration for pyoptimious."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any
from urllib.parse import urlsplit

from pyoptimious._constants import DEFAULT_INTERVAL_SECONDS
from pyoptimious.exceptions import OptimiousConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise OptimiousConfigError(f"{env_key} must be a number, got {value!r}") from exc


def _is_positive(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclasses.dataclass(frozen=True)
class OptimiousConfig:
    """Client configuration.

    Parameters
    ----------
    fetch_url : str
        Absolute ``http``/``https`` URL of the parameters document.
    interval_seconds : float
        Seconds between two periodic fetches once the client is
        initialized.  Must be positive.  Defaults to 30 seconds.
    request_timeout : float or None
        Total timeout in seconds applied by the built-in HTTP transport.
        ``None`` leaves the aiohttp session default in place.
    skip_if_busy : bool
        When ``True`` a timer firing is skipped while the fetch started by
        a previous firing is still in flight.  When ``False`` (default)
        fetches may overlap and the last one to complete wins.
    """

    fetch_url: str
    interval_seconds: float = DEFAULT_INTERVAL_SECONDS
    request_timeout: float | None = None
    skip_if_busy: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.fetch_url, str) or not self.fetch_url.strip():
            raise OptimiousConfigError("fetch_url is required")
        parts = urlsplit(self.fetch_url.strip())
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise OptimiousConfigError(f"fetch_url must be an absolute http(s) URL, got {self.fetch_url!r}")
        if isinstance(self.interval_seconds, bool) or not _is_positive(float(self.interval_seconds)):
            raise OptimiousConfigError(f"interval_seconds must be positive, got {self.interval_seconds!r}")
        if self.request_timeout is not None and not _is_positive(float(self.request_timeout)):
            raise OptimiousConfigError(f"request_timeout must be positive, got {self.request_timeout!r}")

    @classmethod
    def from_env(cls, **overrides: Any) -> OptimiousConfig:
        """Create configuration from environment variables.

        Reads ``OPTIMIOUS_FETCH_URL`` and the optional
        ``OPTIMIOUS_INTERVAL_SECONDS``, ``OPTIMIOUS_REQUEST_TIMEOUT`` and
        ``OPTIMIOUS_SKIP_IF_BUSY`` variables.  Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        OptimiousConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        url = env.get("OPTIMIOUS_FETCH_URL")
        if url is not None:
            config_kwargs["fetch_url"] = url

        _ENV_FLOAT_MAP = {
            "OPTIMIOUS_INTERVAL_SECONDS": "interval_seconds",
            "OPTIMIOUS_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "skip_if_busy" not in overrides:
            config_kwargs["skip_if_busy"] = _env_bool(env.get("OPTIMIOUS_SKIP_IF_BUSY"), False)

        config_kwargs.update(overrides)

        if "fetch_url" not in config_kwargs:
            raise OptimiousConfigError("OPTIMIOUS_FETCH_URL is not set")
        return cls(**config_kwargs)
