"""Building blocks referenced by generated structures.

- `TdObject`: base class of every generated structure.
- `SharedStr`: interned text, used when the generator runs with the shared
  text representation.
- `Int64Str`: 64-bit integer carried as a quoted decimal string on the wire,
  since a JSON number loses precision above 2**53.
- `Unit`: the "no value" type; accepts anything and yields None.
"""

from __future__ import annotations

import sys
from collections.abc import MutableMapping
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, PlainSerializer


class TdObject(BaseModel):
    """Base class of generated structures.

    Fields validate and serialize under their schema names (aliases) while
    remaining constructible by their Python attribute names.
    """

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
        protected_namespaces=(),
    )


def _discard(_: Any) -> None:
    return None


SharedStr = Annotated[str, AfterValidator(sys.intern)]
Int64Str = Annotated[int, PlainSerializer(str, return_type=str, when_used="json")]
Unit = Annotated[None, BeforeValidator(_discard)]


def to_text(value: Any) -> Any:
    """Encode 64-bit integers (or lists of them) for text transport.

    None passes through unchanged so optional arguments stay absent.
    """
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [to_text(item) for item in value]
    return str(value)


def rebuild_models(namespace: MutableMapping[str, Any]) -> None:
    """Resolve forward references of every structure defined in `namespace`.

    Generated modules call this once, after all classes exist, so structures
    may refer to each other (and to themselves) in any order.
    """
    for value in list(namespace.values()):
        if isinstance(value, type) and issubclass(value, TdObject) and value is not TdObject:
            value.model_rebuild(force=True, _types_namespace=dict(namespace))
