"""Nested result shapes for operations.

Walks a resolved selection set down to its leaves, producing one
``DataShape`` per object-typed selection. Each nested shape is named after
the field that reached it, ``PascalCase(field) + "_" + SchemaType``, and is
scoped inside its parent shape, so ``home: Address`` and ``work: Address``
become ``Data.Home_Address`` and ``Data.Work_Address``. Siblings whose
names still coincide, such as aliases ``a`` and ``A``, get a numeric suffix.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence

from graphql import GraphQLObjectType

from .errors import UnsupportedConstructError
from .logger import get_logger
from .naming import pascal_case
from .selections import ResolveContext, ResolvedField, ResolvedSelectionSet, resolve_field_selection_set
from .variables import GenOptions, PLVariable, make_gen_options

log = get_logger("shapes")


@dataclass(frozen=True)
class DataShape:
    """One trait in an operation's result tree."""
    name: str
    # Enclosing shape names, outermost first
    path: tuple[str, ...]
    schema_type: GraphQLObjectType
    fields: tuple[PLVariable, ...] = ()
    children: tuple["DataShape", ...] = ()
    supers: tuple[str, ...] = ()

    @property
    def qualified_name(self) -> str:
        return ".".join((*self.path, self.name))

    def walk(self) -> Iterator["DataShape"]:
        """This shape and all nested shapes, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


def shape_name(field: ResolvedField) -> str:
    """Name of the nested shape reached through ``field``."""
    return f"{pascal_case(field.name)}_{field.named_type.name}"


def build_data_shape(
    context: ResolveContext,
    selects: ResolvedSelectionSet,
    name: str = "Data",
    path: Sequence[str] = (),
    options: GenOptions | None = None,
) -> DataShape:
    """Build the shape for ``selects`` and, recursively, every object field.

    Args:
        context: Resolution context
        selects: Resolved selection set for this level
        name: Name of the shape at this level
        path: Names of the enclosing shapes
        options: Base descriptor options; path and naming are set per level
    """
    path = tuple(path)
    scope = (*path, name)
    base = make_gen_options(options, path=scope, objects_have_parent_type=None, shape_name=None)
    log.debug("Building shape %s over %s", ".".join(scope), selects.of_type.name)

    fields: list[PLVariable] = []
    children: list[DataShape] = []
    taken: set[str] = set()
    for resolved in selects.fields:
        if not resolved.is_object:
            if not resolved.is_leaf:
                raise UnsupportedConstructError(
                    f"Field '{resolved.name}' on '{selects.of_type.name}' selects into abstract type "
                    f"'{resolved.named_type.name}', which is not supported"
                )
            fields.append(resolved.to_variable(base))
            continue
        child_name = _unique(shape_name(resolved), taken)
        fields.append(resolved.to_variable(make_gen_options(base, shape_name=child_name)))
        child_selects = resolve_field_selection_set(context, resolved)
        children.append(build_data_shape(context, child_selects, child_name, scope, options))

    return DataShape(
        name=name,
        path=path,
        schema_type=selects.of_type,
        fields=tuple(fields),
        children=tuple(children),
        supers=selects.supers,
    )


def _unique(name: str, taken: set[str]) -> str:
    # display names differing only in case or underscores share a PascalCase form
    candidate, n = name, 2
    while candidate in taken:
        candidate, n = f"{name}{n}", n + 1
    taken.add(candidate)
    return candidate
