"""Coordinate one generation run and write its output package.

`generate` validates the definitions, runs the metadata pass once and feeds
both emitters. Output is deterministic: the same definitions and
configuration always produce byte-identical sources.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from tdbind.config import GeneratorConfig
from tdbind.domain.schema import Definition

from .functions import emit_operations
from .index import SchemaIndex
from .metadata import analyze
from .types import emit_types

logger = logging.getLogger(__name__)

TYPES_MODULE = "types.py"
OPERATIONS_MODULE = "operations.py"
PACKAGE_INIT = "__init__.py"

INIT_SOURCE = '''"""Bindings generated by tdbind.

Do not edit: regenerate from the schema instead.
"""

from . import operations, types

__all__ = ["operations", "types"]
'''


@dataclass(frozen=True)
class GeneratedBindings:
    """Sources produced by one generation run."""

    types: str
    operations: str

    def files(self) -> dict[str, str]:
        """Return file name -> source for the output package."""
        return {
            PACKAGE_INIT: INIT_SOURCE,
            TYPES_MODULE: self.types,
            OPERATIONS_MODULE: self.operations,
        }


def generate(
    definitions: Iterable[Definition], config: GeneratorConfig | None = None
) -> GeneratedBindings:
    """Generate the ``types`` and ``operations`` modules for a schema.

    Args:
        definitions: The full, ordered definition set.
        config: Generation options; defaults to `GeneratorConfig()`.

    Returns:
        GeneratedBindings: The two module sources.

    Raises:
        SchemaError: If the definitions are inconsistent (duplicate names,
            unresolvable type references). Nothing is emitted in that case.
    """
    config = config or GeneratorConfig()
    definitions = tuple(definitions)
    logger.info(
        "Generating bindings for %d definitions (restricted API: %s, text: %s)",
        len(definitions),
        "on" if config.include_restricted_api else "off",
        config.text_representation.value,
    )

    index = SchemaIndex(definitions)
    metadata = analyze(definitions, index)

    return GeneratedBindings(
        types=emit_types(definitions, metadata, config, index),
        operations=emit_operations(definitions, metadata, config, index),
    )


def write_bindings(bindings: GeneratedBindings, out_dir: Path) -> list[Path]:
    """Write the generated package into `out_dir`.

    The directory is created when missing; existing generated files are
    overwritten.

    Returns:
        list[Path]: The written files.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, source in bindings.files().items():
        path = out_dir / name
        path.write_text(source, encoding="utf-8")
        written.append(path)
        logger.debug("Wrote %s (%d bytes)", path, len(source))
    return written
