"""Type wrappers for nullability and list modifiers.

A GraphQL type such as ``[String!]`` is a nest of list/non-null combinators
around a named type. The composer records those combinators outside-in and
applies the matching target-language wrappers inside-out, so the element
type is wrapped before the list that contains it.

Example:
    wrapper = make_type_wrapper(GraphQLList(GraphQLString), NULL_WRAPPER)
    wrapper("String")  # "js.Array[String|Null]|Null"
"""

from dataclasses import dataclass
from enum import Enum

from graphql import GraphQLType, is_list_type, is_non_null_type


@dataclass(frozen=True)
class WrapperPolicy:
    """How optional and list modifiers are written in the target language."""
    name: str
    list_template: str
    optional_template: str
    optional_zero: str
    list_zero: str

    def make_list(self, type_name: str) -> str:
        return self.list_template.format(type_name)

    def make_optional(self, type_name: str) -> str:
        return self.optional_template.format(type_name)

    def optional_zero_value(self, type_name: str) -> str:
        return self.optional_zero

    def list_zero_value(self, type_name: str) -> str:
        return self.list_zero


# Optional => T|Null
NULL_WRAPPER = WrapperPolicy(
    name="null",
    list_template="js.Array[{}]",
    optional_template="{}|Null",
    optional_zero="null",
    list_zero="js.Array()",
)

# Optional => js.UndefOr[T]
UNDEF_WRAPPER = WrapperPolicy(
    name="undef",
    list_template="js.Array[{}]",
    optional_template="js.UndefOr[{}]",
    optional_zero="js.undefined",
    list_zero="js.Array()",
)

# Optional => js.UndefOr[T|Null], for clients that send both forms
UNDEF_NULL_WRAPPER = WrapperPolicy(
    name="undef-null",
    list_template="js.Array[{}]",
    optional_template="js.UndefOr[{}|Null]",
    optional_zero="js.undefined",
    list_zero="js.Array()",
)

DEFAULT_WRAPPER = NULL_WRAPPER

WRAPPER_POLICIES: dict[str, WrapperPolicy] = {
    policy.name: policy for policy in (NULL_WRAPPER, UNDEF_WRAPPER, UNDEF_NULL_WRAPPER)
}


def get_wrapper_policy(name: str) -> WrapperPolicy:
    """Look up a wrapper policy by name."""
    try:
        return WRAPPER_POLICIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown wrapper policy '{name}', expected one of {sorted(WRAPPER_POLICIES)}"
        ) from None


class WrapOp(str, Enum):
    OPTIONAL = "optional"
    LIST = "list"


def type_wrapper_ops(gql_type: GraphQLType) -> tuple[WrapOp, ...]:
    """Record the wrapping operations of a type, outermost first.

    A layer is optional exactly when it is not directly wrapped in non-null.
    """
    if gql_type is None:
        raise ValueError("Type was None in type wrapper generation")

    ops: list[WrapOp] = []
    current = gql_type
    while True:
        if is_non_null_type(current):
            current = current.of_type
        else:
            ops.append(WrapOp.OPTIONAL)
        if is_list_type(current):
            ops.append(WrapOp.LIST)
            current = current.of_type
            continue
        return tuple(ops)


@dataclass(frozen=True)
class TypeWrapper:
    """Callable that wraps a base type name according to recorded ops."""
    ops: tuple[WrapOp, ...]
    policy: WrapperPolicy = DEFAULT_WRAPPER

    def __call__(self, type_name: str) -> str:
        result = type_name
        for op in reversed(self.ops):
            if op is WrapOp.OPTIONAL:
                result = self.policy.make_optional(result)
            else:
                result = self.policy.make_list(result)
        return result

    @property
    def is_optional(self) -> bool:
        return bool(self.ops) and self.ops[0] is WrapOp.OPTIONAL


def make_type_wrapper(gql_type: GraphQLType, policy: WrapperPolicy = DEFAULT_WRAPPER) -> TypeWrapper:
    """Build a reusable wrapper for the list/non-null structure of ``gql_type``."""
    return TypeWrapper(ops=type_wrapper_ops(gql_type), policy=policy)
