"""Unit tests for identifier and docstring helpers."""

import ast

import pytest

from tdbind.codegen.naming import attr_name, class_name, docstring, function_name


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("user", "User"),
        ("chatPhoto", "ChatPhoto"),
        ("ChatPhoto", "ChatPhoto"),
        ("input_file", "InputFile"),
    ],
)
def test_class_name(name, expected):
    """Schema names become PascalCase class names."""
    assert class_name(name) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("getChat", "get_chat"),
        ("getChatHistory", "get_chat_history"),
        ("close", "close"),
        ("getMe2", "get_me2"),
        ("setTdlibParameters", "set_tdlib_parameters"),
    ],
)
def test_function_name(name, expected):
    """Operation names become snake_case."""
    assert function_name(name) == expected


@pytest.mark.parametrize(
    ("name", "reserved", "expected"),
    [
        ("id", frozenset(), "id"),
        ("class", frozenset(), "class_"),
        ("from", frozenset(), "from_"),
        ("json", frozenset({"json"}), "json_"),
    ],
)
def test_attr_name_escapes_keywords_and_reserved(name, reserved, expected):
    """Keywords and reserved names gain a trailing underscore."""
    assert attr_name(name, reserved) == expected


def _doc_of(lines: list[str]) -> str:
    source = "def f():\n" + "\n".join(lines) + "\n"
    return ast.get_docstring(ast.parse(source).body[0], clean=False)


@pytest.mark.parametrize(
    "text",
    [
        "Plain description.",
        'Ends with a "quote"',
        'Contains """triple""" quotes.',
        "Back\\slash and \\n escapes.",
        "First line.\n\nSecond paragraph.\n  indented",
        'Trailing escaped quote \\"',
    ],
)
def test_docstring_round_trips_text(text):
    """The rendered docstring parses back to the original text."""
    lines = docstring(text, "    ")
    doc = _doc_of(lines)
    # Continuation lines carry the indent; strip it back off for comparison.
    assert doc.replace("\n    ", "\n").rstrip("\n") == text


def test_single_line_docstring_is_one_line():
    """Short descriptions stay on one line."""
    assert docstring("Returns the user.", "    ") == ['    """Returns the user."""']
