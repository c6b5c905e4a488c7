"""High-level async client for a remote parameter set."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import aiohttp

from pyoptimious._api.parameters import fetch_parameters
from pyoptimious._scheduler import AsyncioScheduler, Scheduler
from pyoptimious._transport import HttpTransport, Transport
from pyoptimious.config import OptimiousConfig
from pyoptimious.models import ParameterChange, ParameterMap, ParameterValue
from pyoptimious.poller import ClientState, Poller
from pyoptimious.subscriptions import ChangeListener, SubscriptionRegistry

_logger = logging.getLogger(__name__)


class OptimiousClient:
    """Async client caching a remote parameter set.

    Usage::

        async with OptimiousClient(OptimiousConfig(fetch_url=url)) as client:
            await client.init()
            client.subscribe(print)
            value = client.get_param("max_batch")

    Without the context manager, call :meth:`close` (or at least
    :meth:`destroy`) when done.  ``destroy()`` stops polling
    synchronously; ``close()`` additionally closes the aiohttp session the
    client created for itself.
    """

    def __init__(
        self,
        config: OptimiousConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config
        self._http_session = session
        self._owns_session = False
        self._transport = transport
        self._registry = SubscriptionRegistry()
        self._poller = Poller(
            self._fetch,
            self._registry,
            scheduler if scheduler is not None else AsyncioScheduler(),
            interval=config.interval_seconds,
            skip_if_busy=config.skip_if_busy,
        )

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OptimiousClient:
        self._require_transport()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Destroy the client and release the HTTP session it owns."""
        self.destroy()
        if self._owns_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._owns_session = False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
                self._owns_session = True
            self._transport = HttpTransport(
                self._http_session,
                request_timeout=self._config.request_timeout,
            )
        return self._transport

    async def _fetch(self) -> ParameterMap:
        return await fetch_parameters(self._require_transport(), self._config.fetch_url)

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------

    @property
    def config(self) -> OptimiousConfig:
        return self._config

    @property
    def state(self) -> ClientState:
        return self._poller.state

    @property
    def is_initialized(self) -> bool:
        return self._poller.state is ClientState.READY

    async def init(self) -> None:
        """Fetch the first snapshot and start polling ``config.fetch_url``."""
        await self._poller.init()

    def get_param(self, name: str) -> ParameterValue:
        """Return the current value of *name*."""
        return self._poller.get_param(name)

    def get_params(self) -> ParameterMap:
        """Return a copy of the whole current snapshot."""
        return self._poller.snapshot()

    async def refresh(self) -> list[ParameterChange]:
        """Poll immediately; listeners are notified as for a timer firing."""
        return await self._poller.refresh()

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register *listener* for change batches; returns its unsubscribe callable."""
        return self._registry.subscribe(listener)

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._registry.unsubscribe(listener)

    def destroy(self) -> None:
        """Stop polling, drop listeners and the snapshot.  Terminal."""
        if self._poller.state is not ClientState.DESTROYED:
            _logger.debug("Destroying parameter client for %s", self._config.fetch_url)
        self._poller.destroy()
