"""Name resolution and generation-time schema validation.

`SchemaIndex` is built once per generation run. Building it checks that names
are unique within their category and that every type reference, including
generic arguments, resolves to a built-in or to a `type` definition. Any
inconsistency raises a `SchemaError` before a single line is emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from tdbind.domain.errors import (
    DuplicateDefinitionError,
    SchemaError,
    UnresolvedTypeError,
)
from tdbind.domain.schema import VECTOR_TYPE, Definition, TypeRef

from .naming import class_name

logger = logging.getLogger(__name__)


class MissingGenericArgumentError(SchemaError):
    """Raised when a generic type is referenced without its argument."""

    def __init__(self, type_name: str, referenced_from: str) -> None:
        super().__init__(
            f"Generic type '{type_name}' referenced from '{referenced_from}' "
            "has no type argument."
        )
        self.type_name = type_name
        self.referenced_from = referenced_from


class SchemaIndex:
    """Lookup tables over one validated definition set.

    Args:
        definitions: The full, ordered definition set.

    Raises:
        DuplicateDefinitionError: Two definitions of one category share a
            name (or, for types, the same emitted class name).
        UnresolvedTypeError: A reference names no built-in and no type.
        MissingGenericArgumentError: `vector` is used without an argument.
    """

    def __init__(self, definitions: Iterable[Definition]) -> None:
        self._definitions = tuple(definitions)
        self._types: dict[str, Definition] = {}
        self._functions: dict[str, Definition] = {}

        for definition in self._definitions:
            if definition.is_type:
                key = class_name(definition.name)
                table = self._types
            else:
                key = definition.name
                table = self._functions
            if key in table:
                raise DuplicateDefinitionError(definition.category.value, definition.name)
            table[key] = definition

        self._validate()
        logger.debug(
            "Indexed %d type and %d function definitions",
            len(self._types),
            len(self._functions),
        )

    @property
    def definitions(self) -> tuple[Definition, ...]:
        """All definitions, in schema order."""
        return self._definitions

    @property
    def types(self) -> tuple[Definition, ...]:
        """The `type` definitions, in schema order."""
        return tuple(self._types.values())

    def resolve(self, type_ref: TypeRef, referenced_from: str = "") -> Definition | None:
        """Return the `type` definition a reference names.

        Returns None for built-in names (scalars, unit, `vector`).

        Raises:
            UnresolvedTypeError: If the name is neither built-in nor defined.
        """
        if type_ref.is_builtin:
            return None
        try:
            return self._types[class_name(type_ref.name)]
        except KeyError as e:
            raise UnresolvedTypeError(type_ref.name, referenced_from) from e

    def _validate(self) -> None:
        for definition in self._definitions:
            for type_ref in self._references(definition):
                self._check(type_ref, definition.name)

    def _check(self, type_ref: TypeRef, referenced_from: str) -> None:
        if type_ref.canonical == VECTOR_TYPE:
            if type_ref.generic_arg is None:
                raise MissingGenericArgumentError(type_ref.name, referenced_from)
            self._check(type_ref.generic_arg, referenced_from)
            return
        self.resolve(type_ref, referenced_from)

    @staticmethod
    def _references(definition: Definition) -> Iterator[TypeRef]:
        if definition.is_function:
            yield definition.result
        for param in definition.params:
            yield param.type
