"""Unit tests for the field building blocks of generated structures."""

from __future__ import annotations

import sys

import pytest
from pydantic import Field, TypeAdapter, ValidationError

from tdbind.runtime.fields import Int64Str, SharedStr, TdObject, Unit, rebuild_models, to_text


def test_int64_str_accepts_strings_and_numbers():
    """Both encodings decode to the same int."""
    adapter = TypeAdapter(Int64Str)
    assert adapter.validate_json('"9223372036854775807"') == 2**63 - 1
    assert adapter.validate_json("42") == 42


def test_int64_str_serializes_to_text_in_json_only():
    """JSON output is a string; Python output stays an int."""
    adapter = TypeAdapter(Int64Str)
    assert adapter.dump_json(2**63 - 1) == b'"9223372036854775807"'
    assert adapter.dump_python(7) == 7


def test_int64_str_rejects_garbage():
    """Non-numeric text is a validation error."""
    with pytest.raises(ValidationError):
        TypeAdapter(Int64Str).validate_json('"twelve"')


def test_shared_str_interns():
    """Equal decoded strings are the same object."""
    adapter = TypeAdapter(list[SharedStr])
    first, second = adapter.validate_json('["same", "same"]')
    assert first is second
    assert first is sys.intern("same")


@pytest.mark.parametrize("value", [None, {"@type": "ok"}, 1, "anything"])
def test_unit_discards_any_value(value):
    """The unit type holds nothing."""
    assert TypeAdapter(Unit).validate_python(value) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [(None, None), (5, "5"), ([1, 2], ["1", "2"]), ((3,), ["3"]), ([[4]], [["4"]])],
)
def test_to_text(value, expected):
    """Integers (also nested in lists) become decimal strings."""
    assert to_text(value) == expected


def test_td_object_accepts_names_and_aliases():
    """Structures are constructible by attribute name and by wire name."""

    class Range(TdObject):
        from_: int = Field(alias="from")

    assert Range(from_=1) == Range.model_validate({"from": 1})
    assert Range(from_=1).model_dump_json() == '{"from":1}'


def test_rebuild_models_resolves_forward_references():
    """Classes referring to later classes work once rebuilt."""
    namespace: dict = {"TdObject": TdObject}
    exec(  # pylint: disable=exec-used
        "from __future__ import annotations\n"
        "class A(TdObject):\n"
        "    b: B | None = None\n"
        "class B(TdObject):\n"
        "    a: A | None = None\n",
        namespace,
    )
    rebuild_models(namespace)
    value = namespace["A"].model_validate({"b": {"a": {}}})
    assert isinstance(value.b.a, namespace["A"])
