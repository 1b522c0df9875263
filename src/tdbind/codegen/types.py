"""Emit the ``types`` module: one pydantic structure per qualifying definition.

Each structure looks like:

    class Name(TdObject):
        \"\"\"Description.\"\"\"

        field: Type
        \"\"\"Field description.\"\"\"
        other: Other | None = None

        @classmethod
        def default(cls) -> Name:
            ...

`TdObject` supplies copying, repr, equality and JSON (de)serialization. The
`default` classmethod only exists when the metadata marks the type
default-derivable.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from tdbind.config import GeneratorConfig
from tdbind.domain.schema import Definition, Parameter, visible_params
from tdbind.runtime.fields import TdObject

from .index import SchemaIndex
from .metadata import Metadata
from .naming import attr_name, class_name, docstring
from .type_mapper import INT64_WIRE_EXPR, SHARED_TEXT_EXPR, UNIT_EXPR, emits_structure, map_type

logger = logging.getLogger(__name__)

INDENT = "    "

# Field names that would shadow model machinery.
RESERVED_FIELD_NAMES = frozenset(
    name for name in dir(TdObject) if not name.startswith("_")
) | {"default"}

MODULE_DOCSTRING = '''"""Data structures generated by tdbind.

Do not edit: regenerate from the schema instead.
"""'''

_RUNTIME_NAMES = (INT64_WIRE_EXPR, SHARED_TEXT_EXPR, UNIT_EXPR)
_FIELD = "Field"


def _write_field(
    lines: list[str],
    used: set[str],
    definition: Definition,
    param: Parameter,
    config: GeneratorConfig,
    index: SchemaIndex,
) -> tuple[str, str]:
    """Append one field declaration.

    Returns:
        tuple[str, str]: The attribute name and its zero-value expression.
    """
    mapped = map_type(param.type, config, index, referenced_from=definition.name)
    used.update(n for n in _RUNTIME_NAMES if _mentions(mapped.wire_expr, n))
    name = attr_name(param.name, RESERVED_FIELD_NAMES)
    annotation = f"{mapped.wire_expr} | None" if param.optional else mapped.wire_expr

    if name != param.name:
        used.add(_FIELD)
        default = "default=None, " if param.optional else ""
        lines.append(f'{INDENT}{name}: {annotation} = Field({default}alias="{param.name}")')
    elif param.optional:
        lines.append(f"{INDENT}{name}: {annotation} = None")
    else:
        lines.append(f"{INDENT}{name}: {annotation}")

    if param.description:
        lines.extend(docstring(param.description, INDENT))
    return name, "None" if param.optional else mapped.zero


def _write_default(
    lines: list[str],
    name: str,
    fields: list[tuple[str, str]],
) -> None:
    """Append the `default` classmethod building the zero value."""
    lines.append("")
    lines.append(f"{INDENT}@classmethod")
    lines.append(f"{INDENT}def default(cls) -> {name}:")
    lines.append(f'{INDENT * 2}"""Return the zero value of this structure."""')
    if not fields:
        lines.append(f"{INDENT * 2}return cls()")
        return
    lines.append(f"{INDENT * 2}return cls(")
    lines.extend(f"{INDENT * 3}{field}={zero}," for field, zero in fields)
    lines.append(f"{INDENT * 2})")


def write_struct(
    lines: list[str],
    used: set[str],
    definition: Definition,
    metadata: Metadata,
    config: GeneratorConfig,
    index: SchemaIndex,
) -> None:
    """Append the class for `definition` to `lines`.

    Names the class body needs from outside the module are added to `used`.
    """
    name = class_name(definition.name)
    lines.extend(["", "", f"class {name}(TdObject):"])

    body_start = len(lines)
    if definition.description:
        lines.extend(docstring(definition.description, INDENT))
        lines.append("")

    zero_fields = [
        _write_field(lines, used, definition, param, config, index)
        for param in visible_params(definition, config.include_restricted_api)
    ]

    if len(lines) == body_start:
        lines.append(f"{INDENT}pass")
    elif lines[-1] == "":
        lines.pop()

    if metadata.can_derive_default(definition):
        _write_default(lines, name, zero_fields)


def emit_types(
    definitions: Iterable[Definition],
    metadata: Metadata,
    config: GeneratorConfig,
    index: SchemaIndex | None = None,
) -> str:
    """Render the whole ``types`` module.

    Only `type` definitions that are not special-cased, have at least one
    field and survive capability gating produce a structure.

    Args:
        definitions: The full definition set, in schema order.
        metadata: Derived facts for the same definitions.
        config: Generation options.
        index: A prebuilt index for the same definitions.

    Returns:
        str: The module source.
    """
    definitions = tuple(definitions)
    if index is None:
        index = SchemaIndex(definitions)

    body: list[str] = []
    used: set[str] = set()
    emitted = 0
    for definition in definitions:
        if not emits_structure(definition, config):
            if definition.is_type and definition.restricted and definition.params:
                logger.debug("Skipping restricted type %s", definition.name)
            continue
        write_struct(body, used, definition, metadata, config, index)
        emitted += 1

    lines = [MODULE_DOCSTRING, "", "from __future__ import annotations", ""]
    if _FIELD in used:
        lines.extend(["from pydantic import Field", ""])
    runtime_names = sorted((used - {_FIELD}) | {"TdObject", "rebuild_models"})
    lines.append(f"from tdbind.runtime.fields import {', '.join(runtime_names)}")
    lines.extend(body)
    lines.extend(["", "", "rebuild_models(globals())", ""])

    logger.info("Emitted %d structures", emitted)
    return "\n".join(lines)


def _mentions(annotation: str, name: str) -> bool:
    return re.search(rf"\b{name}\b", annotation) is not None
