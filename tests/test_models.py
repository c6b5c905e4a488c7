from __future__ import annotations

import pytest
from pydantic import ValidationError

from pyoptimious.models import ChangeType, ParameterChange, ParametersDocument, values_differ


def test_added_rejects_old_value() -> None:
    with pytest.raises(ValidationError):
        ParameterChange(name="a", type=ChangeType.ADDED, old_value=1, new_value=2)


def test_deleted_rejects_new_value() -> None:
    with pytest.raises(ValidationError):
        ParameterChange(name="a", type=ChangeType.DELETED, old_value=1, new_value=2)


def test_updated_requires_both_values() -> None:
    with pytest.raises(ValidationError):
        ParameterChange(name="a", type=ChangeType.UPDATED, new_value=2)


def test_updated_rejects_equal_values() -> None:
    with pytest.raises(ValidationError):
        ParameterChange.updated("a", "same", "same")


def test_change_is_frozen() -> None:
    change = ParameterChange.added("a", 1)
    with pytest.raises(ValidationError):
        change.name = "b"  # type: ignore[misc]


def test_change_dumps_with_camel_case_aliases() -> None:
    change = ParameterChange.updated("max_batch", 10, 20)

    dumped = change.model_dump(by_alias=True, mode="json")

    assert dumped == {"name": "max_batch", "type": "updated", "oldValue": 10, "newValue": 20}


def test_change_accepts_camel_case_input() -> None:
    change = ParameterChange.model_validate({"name": "a", "type": "deleted", "oldValue": "x"})

    assert change.type is ChangeType.DELETED
    assert change.old_value == "x"


def test_values_keep_their_json_types() -> None:
    doc = ParametersDocument.model_validate({"parameters": {"i": 1, "f": 1.5, "s": "1"}})

    assert doc.parameters == {"i": 1, "f": 1.5, "s": "1"}
    assert isinstance(doc.parameters["i"], int)
    assert isinstance(doc.parameters["f"], float)
    assert isinstance(doc.parameters["s"], str)


@pytest.mark.parametrize("bad", [True, None, [1], {"nested": 1}])
def test_document_rejects_non_scalar_values(bad: object) -> None:
    with pytest.raises(ValidationError):
        ParametersDocument.model_validate({"parameters": {"a": bad}})


def test_document_ignores_extra_top_level_fields() -> None:
    doc = ParametersDocument.model_validate({"parameters": {}, "version": 3})

    assert doc.parameters == {}


def test_document_preserves_key_order() -> None:
    doc = ParametersDocument.model_validate({"parameters": {"z": 1, "a": 2, "m": 3}})

    assert list(doc.parameters) == ["z", "a", "m"]


@pytest.mark.parametrize(
    ("old", "new", "expected"),
    [
        (1, 1, False),
        (1, 1.0, False),
        (1, 2, True),
        ("a", "a", False),
        ("a", "b", True),
        (1, "1", True),
    ],
)
def test_values_differ(old: object, new: object, expected: bool) -> None:
    assert values_differ(old, new) is expected
