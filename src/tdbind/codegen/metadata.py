"""Derived facts about a definition set, computed once per generation run.

Currently the only fact is *default-derivability*: whether a structurally
valid zero value of a `type` definition can be built mechanically. A type is
default-derivable when every non-optional field is. Scalars, the unit type
and vectors (empty list) always are; optional fields never block (they are
simply absent); a type with no fields trivially is.

The walk over the "non-optional field refers to type" relation is iterative
and memoized with three marks per type. Reaching a type that is still in
progress means the path closed a cycle of required fields, so no finite zero
value exists and the type is not derivable. Every type is resolved exactly
once, so the pass is linear in the number of (type, field) pairs.

Capability gating plays no part here; restricted definitions and fields are
analyzed like every other, which keeps output under different gating
configurations consistent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from enum import Enum
from types import MappingProxyType

from tdbind.domain.schema import VECTOR_TYPE, Definition

from .index import SchemaIndex
from .naming import class_name

logger = logging.getLogger(__name__)


class _Mark(Enum):
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


class Metadata:
    """Read-only result of `analyze`.

    Args:
        derivable: Mapping of emitted class name to default-derivability.
    """

    def __init__(self, derivable: Mapping[str, bool]) -> None:
        self._derivable = MappingProxyType(dict(derivable))

    def can_derive_default(self, definition: Definition) -> bool:
        """Return True if a zero value of `definition` can be derived."""
        if not definition.is_type:
            return False
        return self._derivable[class_name(definition.name)]

    @property
    def derivable(self) -> Mapping[str, bool]:
        """Class name -> default-derivability, for every `type` definition."""
        return self._derivable


def analyze(definitions: Iterable[Definition], index: SchemaIndex | None = None) -> Metadata:
    """Compute the metadata of a definition set.

    Args:
        definitions: The full definition set.
        index: A prebuilt index for the same definitions; built when omitted.

    Returns:
        Metadata: The derived facts.

    Raises:
        SchemaError: If the definitions fail validation while indexing.
    """
    if index is None:
        index = SchemaIndex(definitions)

    marks: dict[str, _Mark] = {}
    results: dict[str, bool] = {}

    def resolve(key: str, value: bool) -> None:
        marks[key] = _Mark.RESOLVED
        results[key] = value

    for root in index.types:
        root_key = class_name(root.name)
        if root_key in marks:
            continue

        marks[root_key] = _Mark.IN_PROGRESS
        # frame: (key, required dependencies, position of the next one to check)
        stack: list[tuple[str, list[Definition], int]] = [
            (root_key, _required_dependencies(root, index), 0)
        ]
        while stack:
            key, deps, position = stack[-1]
            if position == len(deps):
                resolve(key, True)
                stack.pop()
                continue

            dep_key = class_name(deps[position].name)
            mark = marks.get(dep_key)
            if mark is None:
                marks[dep_key] = _Mark.IN_PROGRESS
                stack.append((dep_key, _required_dependencies(deps[position], index), 0))
            elif mark is _Mark.IN_PROGRESS or not results[dep_key]:
                resolve(key, False)
                stack.pop()
            else:
                stack[-1] = (key, deps, position + 1)

    logger.debug(
        "Default-derivable types: %d of %d",
        sum(results.values()),
        len(results),
    )
    return Metadata(results)


def _required_dependencies(definition: Definition, index: SchemaIndex) -> list[Definition]:
    """Return the types that non-optional fields of `definition` require."""
    deps: list[Definition] = []
    for param in definition.params:
        if param.optional or param.type.canonical == VECTOR_TYPE:
            continue
        if (target := index.resolve(param.type, definition.name)) is not None:
            deps.append(target)
    return deps
