"""Change listener registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from pyoptimious.models import ParameterChange

_logger = logging.getLogger(__name__)

ChangeListener = Callable[[Sequence[ParameterChange]], None]


class SubscriptionRegistry:
    """Set of change listeners with isolated, unordered dispatch.

    A listener is either registered or not: subscribing it twice has no
    additional effect.  Dispatch order is an implementation detail and
    callers must not rely on it.  A listener raising an exception is
    logged and skipped; its peers are still notified.
    """

    def __init__(self) -> None:
        # keys only
        self._listeners: dict[ChangeListener, None] = {}

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register *listener* and return a callable that unregisters it."""
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        self._listeners[listener] = None

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: ChangeListener) -> None:
        self._listeners.pop(listener, None)

    def clear(self) -> None:
        self._listeners.clear()

    def notify(self, changes: Sequence[ParameterChange]) -> None:
        """Deliver *changes* to every registered listener once.

        Listeners removed while a dispatch is running are not called for
        the remainder of that dispatch.
        """
        if not changes:
            return
        batch = tuple(changes)
        for listener in list(self._listeners):
            if listener not in self._listeners:
                continue
            try:
                listener(batch)
            except Exception:
                _logger.exception("Parameter change listener %r failed", listener)
