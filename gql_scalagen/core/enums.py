"""Enum overrides and enum definitions.

Overrides come from the ``enumValues`` configuration entry and replace a
schema enum by a type declared elsewhere:

    {"Color": "./colors#Colour"}      # external type Colour from ./colors
    {"Color": "./colors"}             # external type Color from ./colors
    {"Color": {"RED": "red"}}         # keep the type, remap the values
"""

from dataclasses import dataclass, field
from typing import Callable, Mapping

from graphql import GraphQLEnumType, GraphQLSchema, is_enum_type

from .errors import ConfigurationError
from .naming import parse_import, pascal_case


@dataclass(frozen=True)
class EnumOverride:
    """Replacement for a schema enum."""
    type_identifier: str
    source_identifier: str | None = None
    source_file: str | None = None
    mapped_values: dict[str, str] = field(default_factory=dict)

    @property
    def preferred_identifier(self) -> str:
        return self.type_identifier or self.source_identifier


def parse_enum_values(
    schema: GraphQLSchema,
    raw: Mapping[str, str | Mapping[str, str]] | None,
) -> dict[str, EnumOverride]:
    """Parse ``enumValues`` configuration against the schema."""
    overrides: dict[str, EnumOverride] = {}
    for enum_name, value in (raw or {}).items():
        if not is_enum_type(schema.get_type(enum_name)):
            raise ConfigurationError(f"enumValues refers to '{enum_name}', which is not an enum in the schema")
        if isinstance(value, str):
            source_file, identifier = parse_import(value)
            overrides[enum_name] = EnumOverride(
                type_identifier=identifier or enum_name,
                source_identifier=identifier,
                source_file=source_file,
            )
        else:
            overrides[enum_name] = EnumOverride(type_identifier=enum_name, mapped_values=dict(value))
    return overrides


@dataclass
class EnumValueDefinition:
    name: str
    value: str
    description: str | None = None


@dataclass
class EnumDefinition:
    """An enum ready for rendering."""
    name: str
    schema_name: str
    values: list[EnumValueDefinition]
    description: str | None = None


@dataclass(frozen=True)
class EnumGenerationOptions:
    # Use value names as the runtime values instead of any schema values
    use_names: bool = False
    # Upcase the generated type name; values are never touched
    upcase: bool = True
    excludes: tuple[str, ...] = ("__DirectiveLocation", "__TypeKind", "CacheControlScope")


def find_all_enums(schema: GraphQLSchema) -> list[GraphQLEnumType]:
    """Find all schema entries that are enums."""
    return [t for t in schema.type_map.values() if is_enum_type(t)]


def build_enum_definition(
    enum_type: GraphQLEnumType,
    options: EnumGenerationOptions = EnumGenerationOptions(),
    override: EnumOverride | None = None,
    convert_name: Callable[[str], str] | None = None,
) -> EnumDefinition:
    name = (convert_name or pascal_case)(enum_type.name) if options.upcase else enum_type.name
    mapped = override.mapped_values if override else {}
    values = []
    for value_name, enum_value in enum_type.values.items():
        if value_name in mapped:
            runtime_value = mapped[value_name]
        elif options.use_names or enum_value.value is None:
            runtime_value = value_name
        else:
            runtime_value = str(enum_value.value)
        values.append(EnumValueDefinition(value_name, runtime_value, enum_value.description))
    return EnumDefinition(
        name=name,
        schema_name=enum_type.name,
        values=values,
        description=enum_type.description,
    )


def build_enum_definitions(
    schema: GraphQLSchema,
    options: EnumGenerationOptions = EnumGenerationOptions(),
    overrides: Mapping[str, EnumOverride] | None = None,
    convert_name: Callable[[str], str] | None = None,
) -> list[EnumDefinition]:
    """Build definitions for every enum not excluded or declared externally."""
    overrides = overrides or {}
    definitions = []
    for enum_type in find_all_enums(schema):
        if enum_type.name in options.excludes:
            continue
        override = overrides.get(enum_type.name)
        if override is not None and override.source_file:
            continue
        definitions.append(build_enum_definition(enum_type, options, override, convert_name))
    return definitions
