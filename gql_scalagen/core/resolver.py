"""Resolve schema types to target-language type names."""

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from graphql import GraphQLType, get_named_type, is_object_type, is_scalar_type

from .enums import EnumOverride
from .errors import NameResolutionError


@dataclass(frozen=True)
class PLType:
    """A target-language type name and the path of scopes qualifying it."""
    name: str
    path: tuple[str, ...] = ()

    @property
    def qualified_name(self) -> str:
        """Render as ``scope1.scope2.Name``."""
        return ".".join((*self.path, self.name))

    def __str__(self) -> str:
        return self.qualified_name


def resolve_type_name(
    gql_type: GraphQLType,
    scalars: Mapping[str, str],
    enums: Mapping[str, EnumOverride] | None = None,
    *,
    path: Sequence[str] = (),
    parent_type: str | None = None,
    shape_name: str | None = None,
    convert_type_name: Callable[[str], str] | None = None,
) -> PLType:
    """Map a schema type to a base type name (no list/null wrapping).

    Resolution order, first match wins:
      1. scalar substitution table
      2. enum override table
      3. the schema name, converted; object types take ``shape_name`` when
         given and are qualified by ``parent_type`` (a dotted prefix) or
         ``path``
    """
    if gql_type is None:
        raise NameResolutionError("Cannot resolve a name for a missing type")
    named_type = get_named_type(gql_type)
    bottom_name = named_type.name

    if is_scalar_type(named_type) and bottom_name in scalars:
        return _checked(PLType(scalars[bottom_name]), bottom_name)

    if enums and bottom_name in enums:
        return _checked(PLType(enums[bottom_name].preferred_identifier or ""), bottom_name)

    if not is_object_type(named_type):
        name = convert_type_name(bottom_name) if convert_type_name else bottom_name
        return _checked(PLType(name), bottom_name)

    if shape_name:
        name = shape_name
    else:
        name = convert_type_name(bottom_name) if convert_type_name else bottom_name
    qualifier = tuple(parent_type.split(".")) if parent_type else tuple(path)
    return _checked(PLType(name, qualifier), bottom_name)


def _checked(pl_type: PLType, schema_name: str) -> PLType:
    if not pl_type.name:
        raise NameResolutionError(f"No type name could be determined for schema type '{schema_name}'")
    return pl_type
