"""Resolution of operation selection sets against the schema.

A selection set in an operation is a list of AST selections: fields,
fragment spreads and inline fragments. Resolving it against its parent
object type yields a flat list of ``ResolvedField``s, each pointing at the
schema field it selects. Object-typed fields keep their nested selections
unresolved; ``ResolvedSelectionSet.resolve_complex`` resolves one more
level, and ``shapes.build_data_shape`` drives that recursion to the leaves.
"""

from dataclasses import dataclass, field, replace
from typing import Mapping, Sequence

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLField,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    InlineFragmentNode,
    SelectionNode,
    SelectionSetNode,
    TypeNameMetaFieldDef,
    get_named_type,
    is_input_object_type,
    is_leaf_type,
    is_object_type,
    is_scalar_type,
)

from .enums import EnumOverride
from .errors import (
    FieldConflictError,
    FieldNotFoundError,
    FragmentCycleError,
    FragmentNotFoundError,
    FragmentTypeMismatchError,
    SchemaIntegrityError,
    UnsupportedConstructError,
)
from .fragments import FragmentGraph, LoadedFragment, extract_fragment_names
from .logger import get_logger
from .types import debug_type
from .variables import GenOptions, PLVariable, create_variable, make_gen_options

log = get_logger("selections")


@dataclass(frozen=True)
class ResolveContext:
    """What is in scope while resolving: schema, fragments and scalar names."""
    schema: GraphQLSchema
    fragments: tuple[FragmentDefinitionNode, ...] = ()
    scalars: Mapping[str, str] = field(default_factory=dict)
    enums: Mapping[str, EnumOverride] = field(default_factory=dict)
    _by_name: dict = field(init=False, repr=False, compare=False)
    _graph: FragmentGraph = field(init=False, repr=False, compare=False)
    _cyclic: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "fragments", tuple(self.fragments))
        by_name: dict[str, FragmentDefinitionNode] = {}
        for node in self.fragments:
            by_name.setdefault(node.name.value, node)
        graph = _spread_graph(by_name)
        cyclic = {name: component for component in graph.cyclic_components() for name in component}
        object.__setattr__(self, "_by_name", by_name)
        object.__setattr__(self, "_graph", graph)
        object.__setattr__(self, "_cyclic", cyclic)

    def fragment_by_name(self, name: str) -> FragmentDefinitionNode | None:
        """Find a fragment definition by name."""
        return self._by_name.get(name)

    def fragment_cycle(self, name: str) -> list[str] | None:
        """The dependency cycle through ``name``, if it is on one."""
        component = self._cyclic.get(name)
        if component is None:
            return None
        return self._graph.cycle_through(name, component)


def _spread_graph(by_name: Mapping[str, FragmentDefinitionNode]) -> FragmentGraph:
    graph = FragmentGraph()
    for node in by_name.values():
        graph.add_node(LoadedFragment.from_definition(node))
    for name, node in by_name.items():
        for dependency in extract_fragment_names(node.selection_set):
            # unknown spreads fail later, when they are expanded
            if graph.has_node(dependency):
                graph.add_dependency(name, dependency)
    return graph


@dataclass(frozen=True)
class ResolvedField:
    """A field selected on an object type, as used in an operation."""
    # Alias if one was given, else the schema name
    name: str
    schema_name: str
    field: GraphQLField
    parent_type: GraphQLObjectType
    # Nested selections, not resolved
    selections: tuple[SelectionNode, ...] = ()
    documentation: str | None = None
    comment: str | None = None

    @classmethod
    def from_field(
        cls,
        parent_type: GraphQLObjectType,
        field_def: GraphQLField,
        node: FieldNode,
    ) -> "ResolvedField":
        has_alias = node.alias is not None
        return cls(
            name=node.alias.value if has_alias else node.name.value,
            schema_name=node.name.value,
            field=field_def,
            parent_type=parent_type,
            selections=tuple(node.selection_set.selections) if node.selection_set else (),
            documentation=field_def.description or None,
            comment=f"Alias for {node.name.value}" if has_alias else None,
        )

    @property
    def named_type(self) -> GraphQLNamedType:
        return get_named_type(self.field.type)

    @property
    def is_leaf(self) -> bool:
        return is_leaf_type(self.named_type)

    @property
    def is_scalar(self) -> bool:
        return is_scalar_type(self.named_type)

    @property
    def is_object(self) -> bool:
        return is_object_type(self.named_type)

    @property
    def is_input_object(self) -> bool:
        return is_input_object_type(self.named_type)

    def to_variable(self, options: GenOptions | None = None) -> PLVariable:
        """Descriptor for this field; explicit options win over field docs."""
        opts = options or GenOptions()
        if opts.documentation is None and self.documentation:
            opts = make_gen_options(opts, documentation=self.documentation)
        if opts.comment is None and self.comment:
            opts = make_gen_options(opts, comment=self.comment)
        return create_variable(self.name, self.field.type, opts)


@dataclass(frozen=True)
class ResolvedSelectionSet:
    """The fields selected on one object type.

    ``supers`` holds inheritance hints: fragment names when spreads are kept
    as separate traits instead of being flattened.
    """
    of_type: GraphQLObjectType
    fields: tuple[ResolvedField, ...] = ()
    supers: tuple[str, ...] = ()

    def __post_init__(self):
        if self.of_type is None:
            raise ValueError("Cannot create ResolvedSelectionSet with a missing type")

    @property
    def leaves(self) -> list[ResolvedField]:
        return [f for f in self.fields if f.is_leaf]

    @property
    def complex(self) -> list[ResolvedField]:
        """Object-typed fields, the ones with nested selections."""
        return [f for f in self.fields if f.is_object]

    @property
    def partition(self) -> tuple[list[ResolvedField], list[ResolvedField]]:
        return self.leaves, self.complex

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def resolve_complex(self, context: ResolveContext) -> list[tuple[ResolvedField, "ResolvedSelectionSet"]]:
        """Resolve the nested selections of every object-typed field."""
        log.debug(
            "Resolving complex fields of %s: %s",
            self.of_type.name,
            ", ".join(f"{f.name} ({f.field.type})" for f in self.complex),
        )
        return [(f, resolve_field_selection_set(context, f)) for f in self.complex]


def separate_selection_set(
    selections: Sequence[SelectionNode],
) -> tuple[list[FieldNode], list[FragmentSpreadNode], list[InlineFragmentNode]]:
    """Split selections into fields, fragment spreads and inline fragments."""
    fields, spreads, inlines = [], [], []
    for selection in selections:
        if isinstance(selection, FieldNode):
            fields.append(selection)
        elif isinstance(selection, FragmentSpreadNode):
            spreads.append(selection)
        elif isinstance(selection, InlineFragmentNode):
            inlines.append(selection)
        else:
            raise UnsupportedConstructError(f"Unsupported selection node {selection.kind}")
    return fields, spreads, inlines


def lookup_field(parent_type: GraphQLObjectType, field_name: str) -> GraphQLField | None:
    """Find a field by schema name; ``__typename`` is always available."""
    if field_name == "__typename":
        return TypeNameMetaFieldDef
    return parent_type.fields.get(field_name)


def resolve_field_nodes(parent_type: GraphQLObjectType, fields: Sequence[FieldNode]) -> list[ResolvedField]:
    """Resolve field selections against their parent type.

    Lookup uses the schema name, never the alias.
    """
    resolved = []
    for node in fields:
        field_def = lookup_field(parent_type, node.name.value)
        if field_def is None:
            raise FieldNotFoundError(node.name.value, parent_type.name)
        resolved.append(ResolvedField.from_field(parent_type, field_def, node))
    return resolved


def merge_fields(parent_type: GraphQLObjectType, fields: Sequence[ResolvedField]) -> list[ResolvedField]:
    """Collapse fields sharing a display name, keeping the first position.

    Nested selections of the duplicates are concatenated, as GraphQL field
    merging does.
    """
    merged: dict[str, ResolvedField] = {}
    for resolved in fields:
        existing = merged.get(resolved.name)
        if existing is None:
            merged[resolved.name] = resolved
            continue
        if existing.schema_name != resolved.schema_name:
            raise FieldConflictError(resolved.name, existing.schema_name, resolved.schema_name, parent_type.name)
        log.debug("Merging duplicate selection of %s.%s", parent_type.name, resolved.name)
        merged[resolved.name] = replace(existing, selections=existing.selections + resolved.selections)
    return list(merged.values())


def resolve_selection_set(
    context: ResolveContext,
    parent_type: GraphQLObjectType,
    selections: Sequence[SelectionNode],
    convert_spreads_to_fields: bool = True,
) -> ResolvedSelectionSet:
    """Resolve selections on ``parent_type`` into a ResolvedSelectionSet.

    Args:
        context: Schema, fragments and scalars in scope
        parent_type: Object type the selections apply to
        selections: AST selections from the operation or fragment
        convert_spreads_to_fields: True flattens fragment spreads into the
            field list; False keeps them as supers for separate traits
    """
    log.debug("Resolving selection set on %s, %d selection(s)", parent_type.name, len(selections))
    fields, spreads, inlines = separate_selection_set(selections)
    if inlines:
        raise UnsupportedConstructError(
            f"Inline fragments are not supported (found {len(inlines)} on type '{parent_type.name}')"
        )

    resolved = resolve_field_nodes(parent_type, fields)
    spread_fields: list[ResolvedField] = []
    supers: tuple[str, ...] = ()
    if convert_spreads_to_fields:
        for spread in spreads:
            spread_fields.extend(resolve_fragment_spread_to_fields(context, parent_type, spread))
    else:
        for spread in spreads:
            _check_spread_type(context, parent_type, spread.name.value)
        supers = tuple(dict.fromkeys(spread.name.value for spread in spreads))

    log.debug("Fields from selections: %s", [f.name for f in resolved])
    log.debug("Fields from spreads: %s", [f.name for f in spread_fields])
    return ResolvedSelectionSet(
        of_type=parent_type,
        fields=tuple(merge_fields(parent_type, resolved + spread_fields)),
        supers=supers,
    )


def _check_spread_type(context: ResolveContext, parent_type: GraphQLObjectType, name: str) -> GraphQLObjectType:
    of_type = _fragment_type(context, name)
    if of_type.name != parent_type.name:
        raise FragmentTypeMismatchError(name, of_type.name, parent_type.name)
    return of_type


def _fragment_type(context: ResolveContext, name: str) -> GraphQLObjectType:
    fragment = context.fragment_by_name(name)
    if fragment is None:
        raise FragmentNotFoundError(name)
    type_name = fragment.type_condition.name.value
    of_type = context.schema.get_type(type_name)
    if of_type is None:
        raise SchemaIntegrityError(f"Fragment '{name}' is declared on unknown type '{type_name}'")
    if not is_object_type(of_type):
        raise UnsupportedConstructError(f"Fragment '{name}' on non-object type '{type_name}' is not supported")
    return of_type


def resolve_fragment_spread_to_fields(
    context: ResolveContext,
    parent_type: GraphQLObjectType,
    spread: FragmentSpreadNode,
) -> list[ResolvedField]:
    """Expand a fragment spread used on ``parent_type`` into its fields."""
    name = spread.name.value
    _check_spread_type(context, parent_type, name)
    _, pairs = resolve_fragment_name_to_fields(context, name)
    log.debug("Resolved spread %s to %d field(s)", name, len(pairs))
    return [ResolvedField.from_field(parent_type, field_def, node) for node, field_def in pairs]


def resolve_fragment_name_to_fields(
    context: ResolveContext,
    name: str,
) -> tuple[GraphQLObjectType, list[tuple[FieldNode, GraphQLField]]]:
    """Expand a fragment definition to its field nodes and schema fields.

    Spreads at the top level of the fragment are expanded in place and must
    be declared on the same type.
    """
    cycle = context.fragment_cycle(name)
    if cycle:
        raise FragmentCycleError(cycle)
    of_type = _fragment_type(context, name)
    debug_type(of_type, logger=log)

    pairs: list[tuple[FieldNode, GraphQLField]] = []
    for selection in context.fragment_by_name(name).selection_set.selections:
        if isinstance(selection, FieldNode):
            field_def = lookup_field(of_type, selection.name.value)
            if field_def is None:
                raise FieldNotFoundError(selection.name.value, of_type.name)
            pairs.append((selection, field_def))
        elif isinstance(selection, FragmentSpreadNode):
            nested_type, nested = resolve_fragment_name_to_fields(context, selection.name.value)
            if nested_type.name != of_type.name:
                raise FragmentTypeMismatchError(selection.name.value, nested_type.name, of_type.name)
            pairs.extend(nested)
        else:
            raise UnsupportedConstructError(
                f"Inline fragments are not supported (found in fragment '{name}')"
            )
    return of_type, pairs


def resolve_field_selection_set(context: ResolveContext, resolved: ResolvedField) -> ResolvedSelectionSet:
    """Resolve the nested selections of an object-typed field."""
    field_type = resolved.named_type
    if not is_object_type(field_type):
        raise SchemaIntegrityError(
            f"Resolved field '{resolved.parent_type.name}.{resolved.name}' has no selections to resolve"
        )
    return resolve_selection_set(context, field_type, resolved.selections)


def selection_set_to_object(
    context: ResolveContext,
    parent_type: GraphQLNamedType,
    selection_set: SelectionSetNode,
) -> ResolvedSelectionSet | None:
    """Resolve an operation's root selection set; None for non-object roots."""
    if not is_object_type(parent_type):
        return None
    return resolve_selection_set(context, parent_type, selection_set.selections)
