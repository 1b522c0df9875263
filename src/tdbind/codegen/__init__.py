"""Schema-to-binding compiler.

Turns an ordered sequence of schema definitions into two Python modules:
``types`` (pydantic data structures) and ``operations`` (``async`` callables
wired to the correlation runtime).

Pipeline:
- `index.SchemaIndex` validates names and resolves type references.
- `metadata.analyze` computes default-derivability once.
- `types.emit_types` and `functions.emit_operations` render the two modules,
  both calling `type_mapper.map_type` per field/parameter.
- `generator.generate` coordinates the run; `generator.write_bindings` puts
  the result on disk.
"""

from .generator import GeneratedBindings, generate, write_bindings
from .loader import load_definitions

__all__ = ["GeneratedBindings", "generate", "load_definitions", "write_bindings"]
