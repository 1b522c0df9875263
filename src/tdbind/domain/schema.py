"""Immutable schema model handed to the code generator.

A schema is an ordered sequence of `Definition` records. Each definition is
either a data shape (`Category.TYPE`) or a callable operation
(`Category.FUNCTION`). The records are produced by an external schema parser
(or loaded from its JSON serialization, see `tdbind.codegen.loader`) and are
never mutated afterwards.

Capability gating
-----------------
Some definitions and parameters are *restricted*: they only exist for
clients that opt into the restricted API. The predicates `is_visible` and
`visible_params` are the single place that decides what survives gating;
both emitters go through them so that structures and request payloads always
agree field-for-field.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Names the generator never emits structures for. They are "core" values
# handled directly by the type mapper.
SPECIAL_CASED_TYPES = frozenset({"Bool", "Bytes", "Int32", "Int53", "Int64", "Ok"})

# Primitive carriers that are not special-cased definitions but still map to
# native Python values.
PRIMITIVE_TYPES = frozenset({"Double", "String"})

VECTOR_TYPE = "Vector"
UNIT_TYPE = "Ok"


def canonical_name(name: str) -> str:
    """Return `name` with its first letter upper-cased.

    Schemas refer to the same scalar both as a bare (`int64`) and a boxed
    (`Int64`) name; comparisons against the built-in sets use this form.
    """
    return name[:1].upper() + name[1:]


class Category(Enum):
    """The two kinds of schema definitions."""

    TYPE = "type"
    FUNCTION = "function"


@dataclass(frozen=True)
class TypeRef:
    """A reference to a type: a name plus an optional generic argument.

    `vector<int64>` is `TypeRef("vector", TypeRef("int64"))`.
    """

    name: str
    generic_arg: TypeRef | None = None

    @property
    def canonical(self) -> str:
        """The reference name in its canonical (boxed) form."""
        return canonical_name(self.name)

    @property
    def is_special_cased(self) -> bool:
        """True for the closed set of built-in scalars."""
        return self.canonical in SPECIAL_CASED_TYPES

    @property
    def is_builtin(self) -> bool:
        """True for every name the type mapper handles without a definition."""
        return (
            self.is_special_cased
            or self.canonical in PRIMITIVE_TYPES
            or self.canonical == VECTOR_TYPE
        )

    @property
    def is_unit(self) -> bool:
        """True for the sentinel "no value" type."""
        return self.canonical == UNIT_TYPE

    def __str__(self) -> str:
        if self.generic_arg is None:
            return self.name
        return f"{self.name}<{self.generic_arg}>"


@dataclass(frozen=True)
class Parameter:
    """One field of a type, or one argument of a function."""

    name: str
    type: TypeRef
    optional: bool = False
    restricted: bool = False
    description: str = ""


@dataclass(frozen=True)
class Definition:
    """A named schema entry.

    For `Category.TYPE` definitions `result` is the definition's own type;
    for functions it is the return type. `params` keeps schema order, which
    is reproduced in declarations, call signatures and request payloads.
    """

    name: str
    category: Category
    result: TypeRef
    params: tuple[Parameter, ...] = ()
    description: str = ""
    restricted: bool = False

    @property
    def is_type(self) -> bool:
        """True when this definition describes a data shape."""
        return self.category is Category.TYPE

    @property
    def is_function(self) -> bool:
        """True when this definition describes a callable operation."""
        return self.category is Category.FUNCTION


def is_visible(entity: Definition | Parameter, include_restricted: bool) -> bool:
    """Return True if `entity` survives capability gating."""
    return include_restricted or not entity.restricted


def visible_params(
    definition: Definition, include_restricted: bool
) -> tuple[Parameter, ...]:
    """Return the parameters of `definition` that survive capability gating.

    Order is preserved.
    """
    return tuple(p for p in definition.params if is_visible(p, include_restricted))
