"""Minimal difference between two parameter snapshots."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import cast

from pyoptimious.models import ChangeType, ParameterChange, ParameterMap, ParameterValue, values_differ


def compute_diff(
    prev: Mapping[str, ParameterValue],
    next: Mapping[str, ParameterValue],  # noqa: A002
) -> list[ParameterChange]:
    """Return the ordered changes turning *prev* into *next*.

    Adds and updates come first, in *next*'s key order, followed by
    deletes in *prev*'s key order.  Equal maps produce an empty list.
    """
    changes: list[ParameterChange] = []

    for name, new_value in next.items():
        if name not in prev:
            changes.append(ParameterChange.added(name, new_value))
            continue
        old_value = prev[name]
        if values_differ(old_value, new_value):
            changes.append(ParameterChange.updated(name, old_value, new_value))

    for name, old_value in prev.items():
        if name not in next:
            changes.append(ParameterChange.deleted(name, old_value))

    return changes


def apply_changes(base: Mapping[str, ParameterValue], changes: Iterable[ParameterChange]) -> ParameterMap:
    """Return a new map with *changes* applied on top of *base*."""
    result: ParameterMap = dict(base)
    for change in changes:
        if change.type is ChangeType.DELETED:
            result.pop(change.name, None)
        else:
            # added/updated always carry new_value
            result[change.name] = cast(ParameterValue, change.new_value)
    return result
