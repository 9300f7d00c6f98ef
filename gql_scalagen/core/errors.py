"""Errors raised while resolving schemas and documents."""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for all generation failures."""


class SchemaIntegrityError(CodegenError):
    """A selected field, fragment or type does not match the schema."""


class FieldNotFoundError(SchemaIntegrityError):
    def __init__(self, field_name: str, parent_type: str):
        super().__init__(f"Could not find field '{field_name}' on type '{parent_type}'")
        self.field_name = field_name
        self.parent_type = parent_type


class FragmentNotFoundError(SchemaIntegrityError):
    def __init__(self, fragment_name: str):
        super().__init__(f"Could not find fragment named '{fragment_name}'")
        self.fragment_name = fragment_name


class FragmentTypeMismatchError(SchemaIntegrityError):
    def __init__(self, fragment_name: str, fragment_type: str, parent_type: str):
        super().__init__(
            f"Fragment '{fragment_name}' is declared on '{fragment_type}' "
            f"but was spread on '{parent_type}'"
        )
        self.fragment_name = fragment_name
        self.fragment_type = fragment_type
        self.parent_type = parent_type


class FieldConflictError(SchemaIntegrityError):
    def __init__(self, display_name: str, first: str, second: str, parent_type: str):
        super().__init__(
            f"Field '{display_name}' on '{parent_type}' selects both '{first}' and '{second}'"
        )
        self.display_name = display_name
        self.parent_type = parent_type


class MissingRootTypeError(SchemaIntegrityError):
    def __init__(self, operation_type: str):
        super().__init__(f"Unable to find root schema type for operation type '{operation_type}'")
        self.operation_type = operation_type


class UnsupportedConstructError(CodegenError):
    """An AST construct that generation does not handle, e.g. inline fragments."""


class DuplicateFragmentError(CodegenError):
    def __init__(self, fragment_name: str):
        super().__init__(f"Duplicated fragment called '{fragment_name}'")
        self.fragment_name = fragment_name


class FragmentCycleError(CodegenError):
    def __init__(self, chain: list[str]):
        super().__init__(f"Fragment spreads form a cycle: {' -> '.join(chain)}")
        self.chain = chain


class NameResolutionError(CodegenError):
    """No target type name could be determined for a schema type."""


class ConfigurationError(CodegenError):
    """Invalid or inconsistent generator configuration."""


class LoadError(CodegenError):
    """A schema or document file could not be read or parsed."""
