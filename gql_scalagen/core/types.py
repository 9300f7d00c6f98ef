"""Helpers over graphql-core schema types."""

import logging
from typing import Any

from graphql import (
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    OperationType,
    get_named_type,
    get_nullable_type,
    is_abstract_type,
    is_composite_type,
    is_enum_type,
    is_input_object_type,
    is_input_type,
    is_interface_type,
    is_leaf_type,
    is_list_type,
    is_non_null_type,
    is_nullable_type,
    is_object_type,
    is_output_type,
    is_scalar_type,
    is_wrapping_type,
)

from .errors import MissingRootTypeError
from .logger import get_logger

log = get_logger("types")


def get_root_type(operation: OperationType | str, schema: GraphQLSchema) -> GraphQLObjectType:
    """Return the query, mutation or subscription root type for an operation."""
    operation = OperationType(operation)
    root = schema.get_root_type(operation)
    if root is None:
        raise MissingRootTypeError(operation.value)
    return root


def describe_type(gql_type: GraphQLType) -> dict[str, Any]:
    """Evaluate the graphql type predicates for a type."""
    return {
        "is_abstract": is_abstract_type(gql_type),
        "is_composite": is_composite_type(gql_type),
        "is_enum": is_enum_type(gql_type),
        "enum_values": ", ".join(gql_type.values) if is_enum_type(gql_type) else None,
        "is_interface": is_interface_type(gql_type),
        "is_input": is_input_type(gql_type),
        "is_input_object": is_input_object_type(gql_type),
        "is_list": is_list_type(gql_type),
        "is_leaf": is_leaf_type(gql_type),
        "is_output": is_output_type(gql_type),
        "is_nullable": is_nullable_type(gql_type),
        "is_non_null": is_non_null_type(gql_type),
        "is_object": is_object_type(gql_type),
        "is_scalar": is_scalar_type(gql_type),
        "is_wrapping": is_wrapping_type(gql_type),
        "named_type": str(get_named_type(gql_type)),
        "nullable_type": str(get_nullable_type(gql_type)),
    }


def debug_type(gql_type: GraphQLType, indent: int = 0, logger: logging.Logger | None = None):
    """Log the predicates of a type, unwrapping wrapping types recursively."""
    logger = logger or log
    if not logger.isEnabledFor(logging.DEBUG):
        return
    pad = "  " * indent
    logger.debug("%sdebug of type: '%s'", pad, gql_type)
    for key, value in describe_type(gql_type).items():
        logger.debug("%s  %s: %s", pad, key, value)
    if is_wrapping_type(gql_type):
        debug_type(gql_type.of_type, indent + 1, logger)


def interface_names(target: GraphQLObjectType) -> list[str]:
    """Return the names of the interfaces a type implements."""
    return [iface.name for iface in target.interfaces]


def filter_fields_with_parents(target: GraphQLObjectType) -> dict[str, GraphQLField]:
    """Return the fields of ``target`` not declared by any of its interfaces.

    GraphQL repeats interface fields on each implementing type; the target
    language can inherit them instead.
    """
    inherited = {name for iface in target.interfaces for name in iface.fields}
    return {name: f for name, f in target.fields.items() if name not in inherited}
