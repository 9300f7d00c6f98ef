"""Scalar handlers for GraphQL code generation.

Maps GraphQL scalars to Scala.js types, together with the import each
mapped type needs.

Example usage:
    from gql_scalagen.core.scalars import MappedScalar, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("Money", MappedScalar("BigDecimal", "scala.math.BigDecimal"))
    scalars = registry.build_map(schema)  # {"ID": "String", ..., "Money": "BigDecimal"}
"""

from dataclasses import dataclass
from typing import Mapping, Protocol, runtime_checkable

from graphql import GraphQLSchema, is_scalar_type

from .logger import get_logger
from .naming import parse_import

log = get_logger("scalars")

DEFAULT_SCALARS: dict[str, str] = {
    "ID": "String",
    "String": "String",
    "Boolean": "Boolean",
    "Int": "Int",
    "Float": "Float",
}

# Target type for custom scalars nobody mapped
FALLBACK_SCALAR_TYPE = "js.Any"


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar handlers.

    Attributes:
        scala_type: The Scala type name (e.g., "js.Date", "BigDecimal")
        import_statement: Import needed for this type, or None
    """

    scala_type: str
    import_statement: str | None


class DateTimeHandler:
    """DateTime scalars as JavaScript dates."""

    scala_type = "js.Date"
    import_statement = None


class DateHandler:
    """Date scalars as JavaScript dates."""

    scala_type = "js.Date"
    import_statement = None


class UUIDHandler:
    """UUIDs travel as strings."""

    scala_type = "String"
    import_statement = None


class JSONHandler:
    """JSON scalars are untyped."""

    scala_type = "js.Any"
    import_statement = None


class LongHandler:
    """64-bit integers arrive as JavaScript numbers."""

    scala_type = "Double"
    import_statement = None


@dataclass(frozen=True)
class MappedScalar:
    """A scalar mapping given in configuration."""
    scala_type: str
    import_statement: str | None = None

    @classmethod
    def parse(cls, value: str) -> "MappedScalar":
        """Parse ``Type`` or ``module#Type``; the latter also yields an import."""
        module_name, prop_name = parse_import(value)
        if prop_name:
            return cls(scala_type=prop_name, import_statement=f"{module_name}.{prop_name}")
        return cls(scala_type=module_name)


class ScalarRegistry:
    """Registry for scalar handlers.

    Example:
        registry = ScalarRegistry()
        registry.register("DateTime", DateTimeHandler())

        handler = registry.get("DateTime")
        if handler:
            scala_type = handler.scala_type  # "js.Date"
    """

    def __init__(self, overrides: Mapping[str, str] | None = None):
        self._handlers: dict[str, ScalarHandler] = {}
        self._register_defaults()
        for name, value in (overrides or {}).items():
            self.register(name, MappedScalar.parse(value))

    def _register_defaults(self):
        """Register built-in default handlers."""
        for name, scala_type in DEFAULT_SCALARS.items():
            self.register(name, MappedScalar(scala_type))
        self.register("DateTime", DateTimeHandler())
        self.register("Date", DateHandler())
        self.register("UUID", UUIDHandler())
        self.register("JSON", JSONHandler())
        self.register("JSONObject", JSONHandler())
        self.register("Long", LongHandler())

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> ScalarHandler | None:
        """Get the handler for a scalar type, or None if not registered."""
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a handler is registered for a scalar type."""
        return scalar_name in self._handlers

    def get_all_imports(self) -> set[str]:
        """Get all import statements needed for registered handlers."""
        return {h.import_statement for h in self._handlers.values() if h.import_statement}

    def get_imports(self, scalar_names) -> set[str]:
        """Get the import statements needed by the given scalars only."""
        handlers = (self._handlers.get(name) for name in scalar_names)
        return {h.import_statement for h in handlers if h is not None and h.import_statement}

    def build_map(self, schema: GraphQLSchema) -> dict[str, str]:
        """Map every scalar in the schema, plus the defaults, to a Scala type."""
        scalars = {name: self._handlers[name].scala_type for name in DEFAULT_SCALARS}
        for name, gql_type in schema.type_map.items():
            if not is_scalar_type(gql_type) or name in scalars:
                continue
            handler = self.get(name)
            if handler is None:
                log.warning("No mapping for scalar %s, using %s", name, FALLBACK_SCALAR_TYPE)
                scalars[name] = FALLBACK_SCALAR_TYPE
            else:
                scalars[name] = handler.scala_type
        return scalars
