"""Generation-time error definitions.

Schema inconsistencies abort code generation. They are never deferred to the
behavior of the generated code.
"""

# ============================================================================
#                           General schema errors
# ============================================================================


class SchemaError(Exception):
    """Base class for errors found in a schema before any code is emitted."""


class SchemaLoadError(SchemaError):
    """Raised when a schema document cannot be read into definitions."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Cannot load schema from {source}: {reason}")
        self.source = source
        self.reason = reason


# ============================================================================
#                           Name resolution errors
# ============================================================================


class DuplicateDefinitionError(SchemaError):
    """Raised when two definitions of the same category share a name."""

    def __init__(self, category: str, name: str) -> None:
        super().__init__(f"Duplicate {category} definition '{name}'.")
        self.category = category
        self.name = name


class UnresolvedTypeError(SchemaError):
    """Raised when a type reference names no known type."""

    def __init__(self, type_name: str, referenced_from: str) -> None:
        super().__init__(
            f"Unknown type '{type_name}' referenced from '{referenced_from}'."
        )
        self.type_name = type_name
        self.referenced_from = referenced_from
