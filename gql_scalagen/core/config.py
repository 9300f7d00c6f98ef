"""Generator configuration.

``RawConfig`` mirrors the JSON configuration file, with camelCase keys.
``make_config`` applies the defaults once and returns a frozen ``Config``
that the rest of the generator reads.

Example config file:
    {
        "gqlImport": "myapp.graphql#gql",
        "scalars": {"DateTime": "java.time#Instant"},
        "enumValues": {"Color": {"RED": "red"}},
        "wrapperPolicy": "undef"
    }
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Literal, Mapping

from graphql import GraphQLSchema
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .enums import EnumOverride, parse_enum_values
from .errors import ConfigurationError
from .fragments import LoadedFragment
from .logger import get_logger
from .naming import DEFAULT_NAMING_CONVENTION, NameConverter
from .scalars import ScalarRegistry
from .variables import GenOptions, make_gen_options
from .wrappers import WrapperPolicy, get_wrapper_policy

log = get_logger("config")


class RawConfig(BaseModel):
    """Configuration as written by the user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    # ``module#function`` used to parse operation strings; only strings are emitted without it
    gql_import: str | None = None
    naming_convention: str = DEFAULT_NAMING_CONVENTION
    transform_underscore: bool = False
    fragment_object_name: str = "Fragment"
    scalars: dict[str, str] = {}
    skip_typename: bool = False
    enum_values: dict[str, str | dict[str, str]] = {}
    # Paths of documents whose fragments are available but rendered elsewhere
    external_fragments: list[str] = []
    isolate_fragments: bool = True
    output_operation_name_wrangling: bool = True
    separate_interfaces: bool = True
    wrapper_policy: str = "null"
    variant: Literal["default", "apollo"] = "default"
    operation_data_trait_supers: list[str] = []
    operation_variables_trait_supers: list[str] = []


@dataclass(frozen=True)
class Config:
    """Final configuration with every default applied."""
    schema: GraphQLSchema
    gql_import: str | None = None
    convert_name: NameConverter = field(default_factory=NameConverter)
    fragment_object_name: str = "Fragment"
    scalars: Mapping[str, str] = field(default_factory=dict)
    scalar_imports: tuple[str, ...] = ()
    skip_typename: bool = False
    enum_values: Mapping[str, EnumOverride] = field(default_factory=dict)
    # Document fragments followed by external ones
    fragments: tuple[LoadedFragment, ...] = ()
    isolate_fragments: bool = True
    output_operation_name_wrangling: bool = True
    separate_interfaces: bool = True
    wrapper_policy: WrapperPolicy = field(default_factory=lambda: get_wrapper_policy("null"))
    variant: str = "default"
    operation_data_trait_supers: tuple[str, ...] = ()
    operation_variables_trait_supers: tuple[str, ...] = ()

    def gen_options(self, **overrides: Any) -> GenOptions:
        """Descriptor options carrying this configuration's tables."""
        base = GenOptions(
            scalars=self.scalars,
            enums=self.enum_values,
            wrapper_policy=self.wrapper_policy,
            convert_type_name=self.convert_name,
        )
        return make_gen_options(base, **overrides)


def make_config(
    schema: GraphQLSchema,
    raw: RawConfig | Mapping[str, Any] | None = None,
    fragments: Iterable[LoadedFragment] = (),
) -> Config:
    """Apply defaults to ``raw`` and resolve its tables against ``schema``."""
    if raw is None:
        raw = RawConfig()
    elif not isinstance(raw, RawConfig):
        try:
            raw = RawConfig.model_validate(raw)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    try:
        convert_name = NameConverter(raw.naming_convention, raw.transform_underscore)
        wrapper_policy = get_wrapper_policy(raw.wrapper_policy)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    registry = ScalarRegistry(raw.scalars)
    scalars = registry.build_map(schema)
    log.debug("Scalar map: %s", scalars)

    return Config(
        schema=schema,
        gql_import=raw.gql_import or None,
        convert_name=convert_name,
        fragment_object_name=raw.fragment_object_name or "Fragment",
        scalars=scalars,
        scalar_imports=tuple(sorted(registry.get_imports(scalars))),
        skip_typename=raw.skip_typename,
        enum_values=parse_enum_values(schema, raw.enum_values),
        fragments=tuple(fragments),
        isolate_fragments=raw.isolate_fragments,
        output_operation_name_wrangling=raw.output_operation_name_wrangling,
        separate_interfaces=raw.separate_interfaces,
        wrapper_policy=wrapper_policy,
        variant=raw.variant,
        operation_data_trait_supers=tuple(raw.operation_data_trait_supers),
        operation_variables_trait_supers=tuple(raw.operation_variables_trait_supers),
    )


def load_config(path: str | Path) -> RawConfig:
    """Read a JSON configuration file."""
    path = Path(path)
    try:
        return RawConfig.model_validate_json(path.read_text())
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
