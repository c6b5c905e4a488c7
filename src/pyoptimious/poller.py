"""Snapshot ownership and the repeating-fetch lifecycle."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

from pyoptimious._scheduler import ScheduledTask, Scheduler
from pyoptimious.exceptions import (
    FetchError,
    InitializationError,
    NotInitializedError,
    ParameterNotFoundError,
)
from pyoptimious.models import ParameterChange, ParameterMap, ParameterValue
from pyoptimious.state.diff import compute_diff
from pyoptimious.subscriptions import SubscriptionRegistry

_logger = logging.getLogger(__name__)

FetchCallable = Callable[[], Awaitable[ParameterMap]]


class ClientState(StrEnum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    DESTROYED = "destroyed"


class Poller:
    """Owns the current snapshot and keeps it fresh.

    ``init()`` performs the first fetch on behalf of the caller and, on
    success, arms a repeating task through *scheduler*.  Each firing
    fetches, diffs against the stored snapshot, replaces it and forwards a
    non-empty diff to *registry*.  Periodic failures are logged and the
    last-known-good snapshot is kept.

    Fetches started by consecutive firings may overlap; the stored
    snapshot is whichever completed last.  Pass ``skip_if_busy=True`` to
    skip a firing while a previous one is still fetching.
    """

    def __init__(
        self,
        fetch: FetchCallable,
        registry: SubscriptionRegistry,
        scheduler: Scheduler,
        *,
        interval: float,
        skip_if_busy: bool = False,
    ) -> None:
        self._fetch = fetch
        self._registry = registry
        self._scheduler = scheduler
        self._interval = interval
        self._skip_if_busy = skip_if_busy
        self._state = ClientState.UNINITIALIZED
        self._params: ParameterMap = {}
        self._task: ScheduledTask | None = None
        self._ticks_in_flight = 0

    @property
    def state(self) -> ClientState:
        return self._state

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Fetch the first snapshot and start periodic polling.

        Raises
        ------
        InitializationError
            If the first fetch fails, if another ``init()`` is already
            running, or if the poller was destroyed before or during the
            first fetch.
        """
        if self._state is ClientState.READY:
            return
        if self._state is ClientState.DESTROYED:
            raise InitializationError("Client has been destroyed")
        if self._state is ClientState.INITIALIZING:
            raise InitializationError("Initialization already in progress")

        self._state = ClientState.INITIALIZING
        try:
            params = await self._fetch()
        except FetchError as exc:
            if self._state is ClientState.INITIALIZING:
                self._state = ClientState.UNINITIALIZED
            raise InitializationError(f"Initial parameter fetch failed: {exc}", cause=exc) from exc
        except BaseException:
            if self._state is ClientState.INITIALIZING:
                self._state = ClientState.UNINITIALIZED
            raise

        if self._state is not ClientState.INITIALIZING:
            _logger.debug("Discarding initial fetch result received after destroy")
            raise InitializationError("Client was destroyed during initialization")

        self._params = params
        self._state = ClientState.READY
        self._task = self._scheduler.start(self._interval, self._on_tick)
        _logger.debug("Initialized with %d parameter(s); polling every %ss", len(params), self._interval)

    def destroy(self) -> None:
        """Stop polling and drop all state.  Safe to call repeatedly."""
        task = self._task
        self._task = None
        if task is not None:
            task.cancel()
        self._registry.clear()
        self._params = {}
        self._state = ClientState.DESTROYED

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    async def _poll(self) -> list[ParameterChange]:
        params = await self._fetch()
        if self._state is not ClientState.READY:
            _logger.debug("Discarding parameter fetch result received in state %s", self._state)
            return []

        changes = compute_diff(self._params, params)
        self._params = params
        if changes:
            _logger.debug("Parameters changed: %d change(s)", len(changes))
            self._registry.notify(changes)
        return changes

    async def _on_tick(self) -> None:
        if self._state is not ClientState.READY:
            return
        if self._skip_if_busy and self._ticks_in_flight:
            _logger.debug("Previous parameter fetch still in flight; skipping this poll")
            return

        self._ticks_in_flight += 1
        try:
            await self._poll()
        except FetchError:
            _logger.warning("Periodic parameter fetch failed; keeping last snapshot", exc_info=True)
        except Exception:
            _logger.exception("Unexpected error during parameter poll")
        finally:
            self._ticks_in_flight -= 1

    async def refresh(self) -> list[ParameterChange]:
        """Run one poll cycle now and return the changes it produced.

        Unlike timer firings, fetch errors propagate to the caller.
        """
        self._require_ready()
        return await self._poll()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _require_ready(self) -> None:
        if self._state is not ClientState.READY:
            raise NotInitializedError(f"Client is {self._state}; parameters are available only after init()")

    def get_param(self, name: str) -> ParameterValue:
        self._require_ready()
        try:
            return self._params[name]
        except KeyError:
            raise ParameterNotFoundError(name) from None

    def snapshot(self) -> ParameterMap:
        """Return a copy of the current parameter map."""
        self._require_ready()
        return dict(self._params)
