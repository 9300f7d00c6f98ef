"""GraphQL document strings with embedded fragment references.

Each operation and fragment is printed once. Instead of inlining the
fragments it spreads, an operation's printed text is followed by references
into the fragment object, e.g. ``${Fragment.UserFields}``, which Scala
string interpolation fills in. When a fragment graph is supplied the
references cover every fragment reachable from the operation, dependencies
first, so each definition appears exactly once in the final document.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable

from graphql import FragmentDefinitionNode, OperationDefinitionNode, print_ast

from .fragments import FragmentGraph, LoadedFragment, extract_fragment_names, fragments_graph


def fragment_reference(prefix: str, fragment_name: str) -> str:
    """Scala interpolation of a fragment string held by the fragment object."""
    return "${" + prefix + "." + fragment_name + "}"


def escape_document(text: str) -> str:
    """Escape a printed document for an ``s\"\"\"...\"\"\"`` interpolated string."""
    return text.replace("\\", "\\\\").replace("$", "$$")


def referenced_fragments(
    node: FragmentDefinitionNode | OperationDefinitionNode,
    graph: FragmentGraph | None = None,
) -> list[str]:
    """Fragments spread by ``node``; transitively and ordered when ``graph`` is given."""
    names = list(dict.fromkeys(extract_fragment_names(node)))
    if graph is None:
        return names
    return graph.closure(names)


def make_gql_with_fragments(
    node: FragmentDefinitionNode | OperationDefinitionNode,
    fragment_references: Iterable[str],
) -> str:
    """Print ``node`` and append the given fragment references."""
    references = "\n".join(fragment_references)
    printed = escape_document(print_ast(node))
    return f"{printed}\n{references}" if references else printed


def make_gql_with_thunk(
    node: FragmentDefinitionNode | OperationDefinitionNode,
    thunk: Callable[[str], str],
    graph: FragmentGraph | None = None,
) -> str:
    """Print ``node`` with one reference, built by ``thunk``, per needed fragment."""
    return make_gql_with_fragments(node, [thunk(name) for name in referenced_fragments(node, graph)])


def make_gql_for_scala(
    node: FragmentDefinitionNode | OperationDefinitionNode,
    fragment_object_name: str,
    convert_name: Callable[[str], str] | None = None,
    graph: FragmentGraph | None = None,
) -> str:
    """Document text whose fragment spreads resolve against ``fragment_object_name``.

    ``convert_name`` must match the naming used for the fragment members.
    """
    def thunk(name: str) -> str:
        return fragment_reference(fragment_object_name, convert_name(name) if convert_name else name)

    return make_gql_with_thunk(node, thunk, graph)


def make_gql_inline(node: OperationDefinitionNode, graph: FragmentGraph) -> str:
    """Document text with every needed fragment definition printed in place."""
    definitions = [
        escape_document(print_ast(graph.node_data(name).node)) for name in referenced_fragments(node, graph)
    ]
    return make_gql_with_fragments(node, definitions)


@dataclass
class FragmentEntry:
    name: str
    variable_name: str
    document: str


@dataclass
class FragmentBlock:
    """The object declaring one string member per local fragment.

    Members hold a single fragment definition each; operation documents
    reference every member they need.
    """
    object_name: str
    entries: list[FragmentEntry] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.entries)


def build_fragment_block(
    fragments: Iterable[LoadedFragment],
    object_name: str = "Fragment",
    convert_name: Callable[[str], str] | None = None,
) -> FragmentBlock:
    """Collect local fragments, dependencies first, into a fragment block."""
    graph = fragments_graph(fragments)
    entries = []
    for name in graph.overall_order():
        fragment = graph.node_data(name)
        if fragment.is_external:
            continue
        entries.append(
            FragmentEntry(
                name=name,
                variable_name=convert_name(name) if convert_name else name,
                document=make_gql_with_fragments(fragment.node, []),
            )
        )
    return FragmentBlock(object_name=object_name, entries=entries)
