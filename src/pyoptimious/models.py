"""Data models for parameter snapshots and change batches.

* :data:`ParameterValue` is a JSON number or string; booleans, ``null``
  and nested structures are rejected at the wire boundary.
* :class:`ParametersDocument` validates the ``{"parameters": {...}}``
  envelope returned by the endpoint.
* :class:`ParameterChange` is one entry of a diff batch.  It serialises
  with camelCase aliases (``oldValue``/``newValue``) so a batch can be
  forwarded as JSON unchanged.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, model_validator
from pydantic.alias_generators import to_camel

ParameterValue: TypeAlias = StrictInt | StrictFloat | StrictStr
ParameterMap: TypeAlias = dict[str, ParameterValue]


def values_differ(old: Any, new: Any) -> bool:
    """Strict (type-and-value) inequality for parameter values.

    A string never equals a number.  Numbers compare numerically, so
    ``1`` and ``1.0`` are the same JSON number.
    """
    if isinstance(old, str) != isinstance(new, str):
        return True
    return bool(old != new)


class ChangeType(StrEnum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"


class ParameterChange(BaseModel):
    """A single difference between two consecutive snapshots."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: StrictStr
    type: ChangeType
    old_value: ParameterValue | None = None
    new_value: ParameterValue | None = None

    @model_validator(mode="after")
    def _check_values_for_type(self) -> ParameterChange:
        if self.type is ChangeType.ADDED:
            if self.old_value is not None or self.new_value is None:
                raise ValueError("added change carries only new_value")
        elif self.type is ChangeType.DELETED:
            if self.new_value is not None or self.old_value is None:
                raise ValueError("deleted change carries only old_value")
        else:
            if self.old_value is None or self.new_value is None:
                raise ValueError("updated change carries both old_value and new_value")
            if not values_differ(self.old_value, self.new_value):
                raise ValueError("updated change requires old_value != new_value")
        return self

    @classmethod
    def added(cls, name: str, new_value: ParameterValue) -> ParameterChange:
        return cls(name=name, type=ChangeType.ADDED, new_value=new_value)

    @classmethod
    def updated(cls, name: str, old_value: ParameterValue, new_value: ParameterValue) -> ParameterChange:
        return cls(name=name, type=ChangeType.UPDATED, old_value=old_value, new_value=new_value)

    @classmethod
    def deleted(cls, name: str, old_value: ParameterValue) -> ParameterChange:
        return cls(name=name, type=ChangeType.DELETED, old_value=old_value)


class ParametersDocument(BaseModel):
    """Wire envelope of the parameters endpoint."""

    model_config = ConfigDict(extra="ignore")

    parameters: dict[StrictStr, ParameterValue]
