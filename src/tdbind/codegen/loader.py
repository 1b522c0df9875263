"""Load schema definitions from their JSON serialization.

The schema parser is an external collaborator; this loader reads the document
it produces:

    {
      "definitions": [
        {
          "name": "getChat",
          "category": "function",
          "result": {"name": "Chat"},
          "params": [
            {"name": "chat_id", "type": {"name": "int53"}, "description": "..."}
          ],
          "description": "Returns information about a chat."
        }
      ]
    }

`optional`, `restricted` and `description` default to false/empty; generic
references nest through `generic_arg`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ValidationError

from tdbind.domain.errors import SchemaLoadError
from tdbind.domain.schema import Definition


class SchemaDocument(BaseModel):
    """Top-level shape of a schema document."""

    definitions: tuple[Definition, ...]


def load_definitions_from_text(text: str, source: str = "<string>") -> tuple[Definition, ...]:
    """Parse a schema document.

    Args:
        text: The JSON document.
        source: Name used in error messages.

    Returns:
        tuple[Definition, ...]: The definitions, in document order.

    Raises:
        SchemaLoadError: If the document does not match the expected shape.
    """
    try:
        return SchemaDocument.model_validate_json(text).definitions
    except ValidationError as e:
        raise SchemaLoadError(source, str(e)) from e


def load_definitions(path: Path) -> tuple[Definition, ...]:
    """Read and parse the schema document at `path`.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(str(path), e.strerror or str(e)) from e
    return load_definitions_from_text(text, str(path))
