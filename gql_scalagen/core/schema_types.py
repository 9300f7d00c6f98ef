"""Schema-wide traits: object, input and interface types.

Unlike operation shapes these are not narrowed by a selection set. Every
type is rendered once, at the top level, with all of its fields.
"""

from dataclasses import dataclass, field

from graphql import (
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    is_input_object_type,
    is_interface_type,
    is_object_type,
)

from .config import Config
from .logger import get_logger
from .resolver import resolve_type_name
from .types import filter_fields_with_parents, interface_names
from .variables import PLVariable, create_variable, value_literal
from .wrappers import UNDEF_NULL_WRAPPER, WrapperPolicy

log = get_logger("schema_types")


@dataclass
class TraitSpec:
    """A trait to render: name, members and supertypes."""
    name: str
    variables: list[PLVariable] = field(default_factory=list)
    description: str | None = None
    supers: tuple[str, ...] = ()


def _root_type_names(schema: GraphQLSchema) -> set[str]:
    roots = {"Query", "Mutation", "Subscription"}
    for root in (schema.query_type, schema.mutation_type, schema.subscription_type):
        if root is not None:
            roots.add(root.name)
    return roots


def find_object_types(schema: GraphQLSchema) -> list[GraphQLObjectType]:
    """Object types excluding introspection and root operation types."""
    roots = _root_type_names(schema)
    return [
        t
        for name, t in schema.type_map.items()
        if is_object_type(t) and not name.startswith("__") and name not in roots
    ]


def build_object_types(config: Config) -> list[TraitSpec]:
    """Traits for all object types.

    With ``separate_interfaces`` fields declared by an interface are left to
    the interface trait, which becomes a supertype.
    """
    convert = config.convert_name
    traits = []
    for object_type in find_object_types(config.schema):
        if config.separate_interfaces:
            fields = filter_fields_with_parents(object_type)
            supers = tuple(convert(name) for name in interface_names(object_type))
        else:
            fields = object_type.fields
            supers = ()

        variables = [
            create_variable(name, f.type, config.gen_options(documentation=f.description or None))
            for name, f in fields.items()
        ]
        if not config.skip_typename and "__typename" not in object_type.fields:
            variables.append(create_variable("__typename", GraphQLString, config.gen_options()))

        traits.append(
            TraitSpec(
                name=convert(object_type.name),
                variables=variables,
                description=object_type.description or f"Object type {object_type.name}",
                supers=supers,
            )
        )
    log.info("Found %d object types", len(traits))
    return traits


def _input_field_default(config: Config, input_field) -> str | None:
    node = input_field.ast_node
    if node is None or node.default_value is None:
        return None
    type_name = resolve_type_name(
        input_field.type, config.scalars, config.enum_values, convert_type_name=config.convert_name
    ).name
    return value_literal(node.default_value, type_name)


def find_input_types(config: Config) -> list[TraitSpec]:
    """Traits for all input object types.

    The ``apollo`` variant writes optional input fields as
    ``js.UndefOr[T|Null]``.
    """
    policy = UNDEF_NULL_WRAPPER if config.variant == "apollo" else config.wrapper_policy
    traits = []
    for name, input_type in config.schema.type_map.items():
        if not is_input_object_type(input_type) or name.startswith("__"):
            continue
        traits.append(_input_trait(config, input_type, policy))
    log.info("Found %d input types", len(traits))
    return traits


def _input_trait(config: Config, input_type: GraphQLInputObjectType, policy: WrapperPolicy) -> TraitSpec:
    variables = []
    for field_name, input_field in input_type.fields.items():
        default_value = _input_field_default(config, input_field)
        field_options = config.gen_options(
            wrapper_policy=policy,
            default_value=default_value,
            documentation=input_field.description or None,
        )
        variables.append(create_variable(field_name, input_field.type, field_options))
    return TraitSpec(
        name=config.convert_name(input_type.name),
        variables=variables,
        description=input_type.description or f"Input type {input_type.name}",
    )


def find_interface_types(config: Config) -> list[TraitSpec]:
    """Traits for all interface types, with every declared field."""
    traits = []
    for name, interface_type in config.schema.type_map.items():
        if not is_interface_type(interface_type) or name.startswith("__"):
            continue
        traits.append(_interface_trait(config, interface_type))
    log.info("Found %d interface types", len(traits))
    return traits


def _interface_trait(config: Config, interface_type: GraphQLInterfaceType) -> TraitSpec:
    variables = [
        create_variable(name, f.type, config.gen_options(documentation=f.description or None))
        for name, f in interface_type.fields.items()
    ]
    return TraitSpec(
        name=config.convert_name(interface_type.name),
        variables=variables,
        description=interface_type.description or f"Interface type {interface_type.name}",
        supers=tuple(config.convert_name(name) for name in interface_names(interface_type)),
    )
