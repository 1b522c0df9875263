"""Emit the ``operations`` module: one ``async`` callable per function definition.

Each operation looks like:

    async def name(field: Type, client_id: int, *, correlator=None) -> Result:
        request = {
            "@type": "schemaName",
            "field": field,
        }
        response = await dispatch(client_id, request, correlator=correlator)
        return decode_response(response, types.Result, "Result")

Parameters keep schema order in the signature and in the payload. Payload
keys are schema field names; values whose type travels as text are wrapped
with `to_text`. Unit-returning operations decode with
`decode_unit_response`, which only ever looks for an API error.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from tdbind.config import GeneratorConfig
from tdbind.domain.schema import Definition, is_visible, visible_params

from .index import SchemaIndex
from .metadata import Metadata
from .naming import attr_name, continuation, docstring, function_name
from .type_mapper import (
    BUILTIN_NAMES,
    INT64_WIRE_EXPR,
    SHARED_TEXT_EXPR,
    UNIT_EXPR,
    UNIT_RETURN_EXPR,
    map_type,
)

logger = logging.getLogger(__name__)

INDENT = "    "
TYPES_QUALIFIER = "types."
REQUEST_TYPE_KEY = "@type"

# Module-level, local and builtin names an argument must not shadow.
RESERVED_ARGUMENT_NAMES = BUILTIN_NAMES | frozenset(
    {
        "client_id",
        "correlator",
        "request",
        "response",
        "types",
        "dispatch",
        "decode_response",
        "decode_unit_response",
        "to_text",
        "Correlator",
        "SharedStr",
        "Int64Str",
        "Unit",
    }
)

MODULE_DOCSTRING = '''"""Operations generated by tdbind.

Every operation sends one request through the correlation runtime and decodes
the matching response. Failures surface as `tdbind.runtime.TdError`.

Do not edit: regenerate from the schema instead.
"""'''

CLIENT_ID_DOC = "client_id: The client id to send the request to."
CORRELATOR_DOC = (
    "correlator: Correlation context to send through. Defaults to the\n"
    "installed default correlator."
)

# Names imported from tdbind.runtime.fields when an annotation mentions them.
_FIELD_NAMES = frozenset({INT64_WIRE_EXPR, SHARED_TEXT_EXPR, UNIT_EXPR})


def _collect_names(used: set[str], expr: str) -> None:
    """Add the module-level names `expr` refers to."""
    if TYPES_QUALIFIER in expr:
        used.add("types")
    used.update(n for n in _FIELD_NAMES if re.search(rf"\b{n}\b", expr))


def write_function(
    lines: list[str],
    used: set[str],
    definition: Definition,
    config: GeneratorConfig,
    index: SchemaIndex,
) -> None:
    """Append the operation for `definition` to `lines`.

    Names the function needs from outside the module are added to `used`.
    """
    params = visible_params(definition, config.include_restricted_api)
    result = map_type(
        definition.result, config, index, TYPES_QUALIFIER, referenced_from=definition.name
    )
    return_expr = UNIT_RETURN_EXPR if result.is_unit else result.expr

    arguments: list[tuple[str, str, str]] = []  # (argument, annotation, payload value)
    for param in params:
        mapped = map_type(
            param.type, config, index, TYPES_QUALIFIER, referenced_from=definition.name
        )
        argument = attr_name(param.name, RESERVED_ARGUMENT_NAMES)
        annotation = f"{mapped.expr} | None" if param.optional else mapped.expr
        value = argument
        if mapped.text_encoded:
            value = f"to_text({argument})"
            used.add("to_text")
        _collect_names(used, mapped.expr)
        arguments.append((argument, annotation, value))
    if not result.is_unit:
        _collect_names(used, result.wire_expr)

    # Signature
    name = attr_name(function_name(definition.name), RESERVED_ARGUMENT_NAMES)
    lines.extend(["", "", f"async def {name}("])
    lines.extend(f"{INDENT}{argument}: {annotation}," for argument, annotation, _ in arguments)
    lines.append(f"{INDENT}client_id: int,")
    lines.append(f"{INDENT}*,")
    lines.append(f"{INDENT}correlator: Correlator | None = None,")
    lines.append(f") -> {return_expr}:")

    # Documentation
    doc = [definition.description, ""] if definition.description else []
    doc.append("Args:")
    for param, (argument, _, _) in zip(params, arguments, strict=True):
        described = f"{argument}: {param.description}".rstrip()
        doc.append(f"{INDENT}{continuation(described, INDENT * 2)}")
    doc.append(f"{INDENT}{CLIENT_ID_DOC}")
    doc.append(f"{INDENT}{continuation(CORRELATOR_DOC, INDENT * 2)}")
    lines.extend(docstring("\n".join(doc), INDENT))

    # Compose request
    lines.append(f"{INDENT}request = {{")
    lines.append(f'{INDENT * 2}"{REQUEST_TYPE_KEY}": "{definition.name}",')
    lines.extend(
        f'{INDENT * 2}"{param.name}": {value},'
        for param, (_, _, value) in zip(params, arguments, strict=True)
    )
    lines.append(f"{INDENT}}}")

    # Send request and decode response
    lines.append(
        f"{INDENT}response = await dispatch(client_id, request, correlator=correlator)"
    )
    if result.is_unit:
        used.add("decode_unit_response")
        lines.append(f"{INDENT}decode_unit_response(response)")
    else:
        used.add("decode_response")
        lines.append(
            f'{INDENT}return decode_response(response, {result.wire_expr}, "{result.type_name}")'
        )


def emit_operations(
    definitions: Iterable[Definition],
    metadata: Metadata,  # pylint: disable=unused-argument
    config: GeneratorConfig,
    index: SchemaIndex | None = None,
) -> str:
    """Render the whole ``operations`` module.

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
    used: set[str] = {"Correlator", "dispatch"}
    emitted = 0
    for definition in definitions:
        if not definition.is_function:
            continue
        if not is_visible(definition, config.include_restricted_api):
            logger.debug("Skipping restricted function %s", definition.name)
            continue
        write_function(body, used, definition, config, index)
        emitted += 1

    field_names = sorted(used & _FIELD_NAMES)
    runtime_names = sorted(used - _FIELD_NAMES - {"types"})
    lines = [MODULE_DOCSTRING, "", "from __future__ import annotations", ""]
    lines.append(f"from tdbind.runtime import {', '.join(runtime_names)}")
    if field_names:
        lines.append(f"from tdbind.runtime.fields import {', '.join(field_names)}")
    if "types" in used:
        lines.extend(["", "from . import types"])
    lines.extend(body)
    lines.append("")

    logger.info("Emitted %d operations", emitted)
    return "\n".join(lines)
