"""Unit tests for default-derivability analysis."""

import pytest

from tdbind.codegen.metadata import analyze
from tests.helpers.schema import SAMPLE_SCHEMA, fn, p, ty


def derivable(*definitions):
    """Class name -> derivability for `definitions`."""
    return dict(analyze(definitions).derivable)


def test_int64_only_type_is_derivable():
    """A type whose only field is a built-in scalar is derivable."""
    assert derivable(ty("getUser", p("id", "int64"))) == {"GetUser": True}


def test_zero_field_type_is_derivable():
    """A type with no fields trivially is."""
    assert derivable(ty("empty")) == {"Empty": True}


def test_self_cycle_is_not_derivable():
    """A required field of the type's own type has no finite zero value."""
    assert derivable(ty("node", p("next", "node"))) == {"Node": False}


def test_optional_self_reference_is_derivable():
    """Optional fields never block derivation."""
    assert derivable(ty("node", p("next", "node", optional=True))) == {"Node": True}


def test_vector_self_reference_is_derivable():
    """A vector's zero value is the empty list."""
    assert derivable(ty("tree", p("children", "vector<tree>"))) == {"Tree": True}


def test_mutual_cycle_is_not_derivable():
    """Both members of a required-field cycle are non-derivable."""
    result = derivable(ty("a", p("b", "b")), ty("b", p("a", "a")))
    assert result == {"A": False, "B": False}


def test_dependency_on_a_cycle_is_not_derivable():
    """Reaching a cycle through a required field poisons the referrer."""
    result = derivable(
        ty("holder", p("a", "a")),
        ty("a", p("b", "b")),
        ty("b", p("a", "a")),
    )
    assert result == {"Holder": False, "A": False, "B": False}


def test_result_does_not_depend_on_definition_order():
    """Walking from either end of a chain gives the same answer."""
    chain = [ty("a", p("b", "b")), ty("b", p("c", "c")), ty("c", p("x", "int32"))]
    assert derivable(*chain) == derivable(*reversed(chain))
    assert all(derivable(*chain).values())


def test_cycle_broken_by_optional_field():
    """message <-> chat is fine when chat refers to message optionally."""
    result = analyze(SAMPLE_SCHEMA).derivable
    assert result["Chat"] is True
    assert result["Message"] is True
    assert result["Node"] is False


def test_restricted_fields_still_count():
    """Derivability ignores gating so output agrees across configurations."""
    result = derivable(ty("node", p("next", "node", restricted=True)))
    assert result == {"Node": False}


def test_functions_are_never_derivable():
    """Only types have zero values."""
    definitions = (ty("user", p("id", "int53")), fn("getMe", "user"))
    metadata = analyze(definitions)
    assert metadata.can_derive_default(definitions[0]) is True
    assert metadata.can_derive_default(definitions[1]) is False


def test_metadata_is_read_only():
    """The derived mapping cannot be altered after analysis."""
    metadata = analyze([ty("user", p("id", "int53"))])
    with pytest.raises(TypeError):
        metadata.derivable["User"] = False  # type: ignore[index]


def test_long_chain_does_not_recurse():
    """Deep required-field chains are walked without recursion limits."""
    depth = 5000
    chain = [ty(f"t{i}", p("next", f"t{i + 1}")) for i in range(depth)]
    chain.append(ty(f"t{depth}", p("value", "int32")))
    assert all(derivable(*chain).values())
