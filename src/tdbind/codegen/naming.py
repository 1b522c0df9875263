"""Naming and docstring helpers shared by the emitters."""

import keyword
import re

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_IDENTIFIER = re.compile(r"[^0-9a-zA-Z_]+")


def class_name(name: str) -> str:
    """Return the PascalCase class name for a schema name.

    `user` -> `User`, `chatPhoto` -> `ChatPhoto`.
    """
    cleaned = _NON_IDENTIFIER.sub("_", name)
    return "".join(part[:1].upper() + part[1:] for part in cleaned.split("_") if part)


def function_name(name: str) -> str:
    """Return the snake_case function name for a schema name.

    `getChat` -> `get_chat`, `getChatHistory` -> `get_chat_history`.
    """
    cleaned = _NON_IDENTIFIER.sub("_", name)
    return _CAMEL_BOUNDARY.sub("_", cleaned).lower()


def attr_name(name: str, reserved: frozenset[str] = frozenset()) -> str:
    """Return a usable Python identifier for a schema field name.

    Keywords and names in `reserved` get a trailing underscore; the schema
    name itself stays the wire key.
    """
    if keyword.iskeyword(name) or name in reserved:
        return f"{name}_"
    return name


def docstring(text: str, indent: str) -> list[str]:
    """Render `text` as docstring lines indented by `indent`.

    The text is carried through unchanged; only backslashes and triple quotes
    are escaped so the runtime `__doc__` equals the schema description.
    """
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    # A closing quote right before the terminator must be escaped unless an
    # odd run of backslashes already escapes it.
    head = escaped[:-1]
    if escaped.endswith('"') and (len(head) - len(head.rstrip("\\"))) % 2 == 0:
        escaped = head + '\\"'
    lines = escaped.splitlines()
    if len(lines) <= 1:
        return [f'{indent}"""{escaped}"""']
    rendered = [f'{indent}"""{lines[0]}']
    rendered.extend(f"{indent}{line}" if line else "" for line in lines[1:])
    rendered.append(f'{indent}"""')
    return rendered


def continuation(text: str, indent: str) -> str:
    """Join the lines of `text` so they continue under an `Args:` entry."""
    return f"\n{indent}".join(text.splitlines())
