"""Map schema type references to Python type expressions.

`map_type` is pure: the same reference, configuration and index always yield
the same `MappedType`. Optionality is not handled here; the emitters wrap the
result in `X | None` themselves so one mapping serves both struct fields and
operation parameters.

Integer widths that do not survive a round trip through a JSON number
(`Int64`) are flagged `text_encoded`. Struct fields then use `wire_expr`,
which attaches the `Int64Str` adapter, and operation payloads wrap the value
with `to_text`.
"""

from __future__ import annotations

from dataclasses import dataclass

from tdbind.config import GeneratorConfig
from tdbind.domain.schema import VECTOR_TYPE, Definition, TypeRef, is_visible

from .index import MissingGenericArgumentError, SchemaIndex
from .naming import class_name

UNIT_EXPR = "Unit"
UNIT_RETURN_EXPR = "None"
SHARED_TEXT_EXPR = "SharedStr"
INT64_WIRE_EXPR = "Int64Str"


@dataclass(frozen=True)
class MappedType:
    """The Python rendering of one type reference.

    Attributes:
        expr: Annotation used in signatures.
        wire_expr: Annotation used in structures; equal to `expr` unless
            `text_encoded` is set.
        type_name: Unqualified name reported in decoding errors.
        zero: Expression producing the zero value of the type.
        text_encoded: The value travels as a quoted decimal string.
        is_unit: The type carries no value.
    """

    expr: str
    wire_expr: str
    type_name: str
    zero: str
    text_encoded: bool = False
    is_unit: bool = False


# canonical name -> (expr, zero)
_SCALARS: dict[str, tuple[str, str]] = {
    "Bool": ("bool", "False"),
    "Int32": ("int", "0"),
    "Int53": ("int", "0"),
    "Double": ("float", "0.0"),
    "Bytes": ("str", '""'),
}

# Builtins that annotations emitted into generated code refer to at runtime.
BUILTIN_NAMES = frozenset(expr for expr, _ in _SCALARS.values()) | {"list"}


def map_type(
    type_ref: TypeRef,
    config: GeneratorConfig,
    index: SchemaIndex,
    qualifier: str = "",
    referenced_from: str = "",
) -> MappedType:
    """Map `type_ref` to its Python type expression.

    Args:
        type_ref: The reference to map.
        config: Generation options; selects the text representation.
        index: Resolves references to schema types.
        qualifier: Prefix for generated structure names (e.g. `"types."`).
        referenced_from: Definition name used in error messages.

    Returns:
        MappedType: The rendered annotation and its flags.

    Raises:
        UnresolvedTypeError: If a referenced type does not exist.
        MissingGenericArgumentError: If `vector` has no argument.
    """
    canonical = type_ref.canonical

    if canonical == VECTOR_TYPE:
        if type_ref.generic_arg is None:
            raise MissingGenericArgumentError(type_ref.name, referenced_from)
        inner = map_type(type_ref.generic_arg, config, index, qualifier, referenced_from)
        return MappedType(
            expr=f"list[{inner.expr}]",
            wire_expr=f"list[{inner.wire_expr}]",
            type_name=f"list[{inner.type_name}]",
            zero="[]",
            text_encoded=inner.text_encoded,
        )

    if type_ref.is_unit:
        return _unit(canonical)

    if canonical == "Int64":
        return MappedType(
            expr="int",
            wire_expr=INT64_WIRE_EXPR,
            type_name=canonical,
            zero="0",
            text_encoded=True,
        )

    if canonical == "String":
        text = SHARED_TEXT_EXPR if config.use_shared_text else "str"
        return MappedType(expr=text, wire_expr=text, type_name=canonical, zero='""')

    if canonical in _SCALARS:
        expr, zero = _SCALARS[canonical]
        return MappedType(expr=expr, wire_expr=expr, type_name=canonical, zero=zero)

    definition = index.resolve(type_ref, referenced_from)
    assert definition is not None  # built-ins are handled above
    name = class_name(definition.name)
    if not emits_structure(definition, config):
        return _unit(name)
    qualified = f"{qualifier}{name}"
    return MappedType(
        expr=qualified, wire_expr=qualified, type_name=name, zero=f"{qualified}.default()"
    )


def emits_structure(definition: Definition, config: GeneratorConfig) -> bool:
    """Return True if the structure emitter produces a class for `definition`.

    Special-cased scalars, field-less types and gated-out restricted types
    have no class; references to them map to the unit type.
    """
    return (
        definition.is_type
        and not definition.result.is_special_cased
        and bool(definition.params)
        and is_visible(definition, config.include_restricted_api)
    )


def _unit(type_name: str) -> MappedType:
    return MappedType(
        expr=UNIT_EXPR, wire_expr=UNIT_EXPR, type_name=type_name, zero="None", is_unit=True
    )
