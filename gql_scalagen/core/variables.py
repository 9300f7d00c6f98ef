"""Field descriptors: the unit handed to rendering.

A ``PLVariable`` describes one target-language member: its name, base type,
wrapper for nullability/lists, default value and documentation. Descriptors
come from schema fields, resolved selections and operation variables.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Mapping, Sequence

from graphql import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    GraphQLSchema,
    GraphQLType,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    StringValueNode,
    ValueNode,
    VariableDefinitionNode,
    is_list_type,
    is_non_null_type,
    type_from_ast,
)

from .enums import EnumOverride
from .errors import SchemaIntegrityError
from .logger import get_logger
from .resolver import PLType, resolve_type_name
from .wrappers import DEFAULT_WRAPPER, UNDEF_WRAPPER, TypeWrapper, WrapperPolicy, make_type_wrapper

log = get_logger("variables")


@dataclass(frozen=True)
class GenOptions:
    """Fully specified options for building one descriptor."""
    scalars: Mapping[str, str] = field(default_factory=dict)
    enums: Mapping[str, EnumOverride] = field(default_factory=dict)
    # Qualifying path for object types
    path: tuple[str, ...] = ()
    # Dotted prefix for object types; overrides path
    objects_have_parent_type: str | None = None
    # Explicit name for an object-typed member's nested shape
    shape_name: str | None = None
    immutable: bool = True
    wrapper_policy: WrapperPolicy = DEFAULT_WRAPPER
    default_value: str | None = None
    documentation: str | None = None
    comment: str | None = None
    convert_name: Callable[[str], str] | None = None
    convert_type_name: Callable[[str], str] | None = None


def make_gen_options(base: GenOptions | None = None, **overrides: Any) -> GenOptions:
    """Return complete options from ``base`` (or the defaults) plus overrides."""
    if "path" in overrides:
        overrides["path"] = tuple(overrides["path"])
    return replace(base or GenOptions(), **overrides)


@dataclass(frozen=True)
class PLVariable:
    """A target-language member declaration."""
    name: str
    type: PLType
    wrapper: TypeWrapper
    nullable: bool
    default_value: str | None = None
    documentation: str | None = None
    comment: str | None = None
    immutable: bool = True
    # Schema name when name conversion changed it
    original_name: str | None = None

    @property
    def type_signature(self) -> str:
        """The fully wrapped type, e.g. ``js.Array[String]|Null``."""
        return self.wrapper(self.type.qualified_name)


def create_variable(name: str, gql_type: GraphQLType, options: GenOptions | None = None) -> PLVariable:
    """Build a descriptor for ``name`` of schema type ``gql_type``."""
    opts = options or GenOptions()
    wrapper = make_type_wrapper(gql_type, opts.wrapper_policy)
    pl_type = resolve_type_name(
        gql_type,
        opts.scalars,
        opts.enums,
        path=opts.path,
        parent_type=opts.objects_have_parent_type,
        shape_name=opts.shape_name,
        convert_type_name=opts.convert_type_name,
    )
    nullable = not is_non_null_type(gql_type)

    default_value = opts.default_value
    if default_value is None and is_list_type(gql_type):
        default_value = opts.wrapper_policy.list_zero_value(pl_type.name)
    elif default_value is None and nullable:
        default_value = opts.wrapper_policy.optional_zero_value(pl_type.name)

    target_name = opts.convert_name(name) if opts.convert_name else name
    return PLVariable(
        name=target_name,
        type=pl_type,
        wrapper=wrapper,
        nullable=nullable,
        default_value=default_value,
        documentation=opts.documentation,
        comment=opts.comment,
        immutable=opts.immutable,
        original_name=name if target_name != name else None,
    )


def value_literal(node: ValueNode, type_name: str | None = None) -> str | None:
    """Translate a GraphQL literal into a Scala.js expression.

    Returns None for literals with no direct translation (input objects,
    variables).
    """
    if isinstance(node, (IntValueNode, FloatValueNode)):
        return node.value
    if isinstance(node, BooleanValueNode):
        return "true" if node.value else "false"
    if isinstance(node, StringValueNode):
        return json.dumps(node.value)
    if isinstance(node, NullValueNode):
        return "null"
    if isinstance(node, EnumValueNode):
        return f"{type_name}.{node.value}" if type_name else json.dumps(node.value)
    if isinstance(node, ListValueNode):
        items = [value_literal(item, type_name) for item in node.values]
        if any(item is None for item in items):
            return None
        return f"js.Array({', '.join(items)})"
    return None


def variables_from_definitions(
    schema: GraphQLSchema,
    definitions: Sequence[VariableDefinitionNode],
    options: GenOptions | None = None,
) -> list[PLVariable]:
    """Create descriptors for operation variables.

    Variables may always be left out by the caller, so optionality is
    expressed with ``js.UndefOr`` regardless of the configured policy.
    """
    base = make_gen_options(options, wrapper_policy=UNDEF_WRAPPER, path=(), objects_have_parent_type=None)
    result = []
    for definition in definitions or ():
        var_name = definition.variable.name.value
        gql_type = type_from_ast(schema, definition.type)
        if gql_type is None:
            raise SchemaIntegrityError(f"Variable '${var_name}' has a type unknown to the schema")

        default_value = None
        if definition.default_value is not None:
            type_name = resolve_type_name(
                gql_type, base.scalars, base.enums, convert_type_name=base.convert_type_name
            ).name
            default_value = value_literal(definition.default_value, type_name)
            if default_value is None:
                log.debug("No literal translation for default of $%s", var_name)
        if default_value is None and not is_non_null_type(gql_type):
            default_value = UNDEF_WRAPPER.optional_zero_value(var_name)

        result.append(create_variable(var_name, gql_type, make_gen_options(base, default_value=default_value)))
    return result
