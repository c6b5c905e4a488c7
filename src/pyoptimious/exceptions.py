"""Custom exception hierarchy for pyoptimious."""

from __future__ import annotations


class OptimiousError(Exception):
    """Base exception for all pyoptimious errors."""


class OptimiousConfigError(OptimiousError):
    """Invalid or missing configuration."""


class FetchError(OptimiousError):
    """A single parameter fetch failed."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class NetworkError(FetchError):
    """The transport call itself failed (connection refused, DNS, timeout...)."""


class HttpStatusError(FetchError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        super().__init__(message, url=url)


class MalformedResponseError(FetchError):
    """Body is not JSON or does not match ``{"parameters": {...}}``."""


class InitializationError(OptimiousError):
    """The first fetch performed by ``init()`` did not succeed.

    The underlying :class:`FetchError` (if any) is available both as
    ``__cause__`` and as :attr:`cause`.  The client stays uninitialized
    and ``init()`` may be called again.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        self.cause = cause
        super().__init__(message)


class NotInitializedError(OptimiousError):
    """Parameters were read before ``init()`` completed or after ``destroy()``."""


class ParameterNotFoundError(OptimiousError):
    """The requested parameter is not part of the current snapshot."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Parameter {name!r} not found")
