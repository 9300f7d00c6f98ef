"""Fragment collection, dependency ordering and deduplication.

Fragments arrive from the operation documents and, optionally, from
external files. Both participate in dependency ordering, but only the
document fragments are emitted: external ones are rendered elsewhere.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterable

from graphql import FragmentDefinitionNode, FragmentSpreadNode, Node, Visitor, print_ast, visit

from .errors import DuplicateFragmentError, FragmentNotFoundError
from .logger import get_logger

log = get_logger("fragments")


@dataclass(frozen=True)
class LoadedFragment:
    """A fragment definition and where it came from."""
    name: str
    node: FragmentDefinitionNode
    on_type: str
    is_external: bool = False

    @classmethod
    def from_definition(cls, node: FragmentDefinitionNode, is_external: bool = False) -> "LoadedFragment":
        return cls(
            name=node.name.value,
            node=node,
            on_type=node.type_condition.name.value,
            is_external=is_external,
        )


class _SpreadCollector(Visitor):
    def __init__(self):
        super().__init__()
        self.names: list[str] = []

    def enter_fragment_spread(self, node: FragmentSpreadNode, *_args):
        self.names.append(node.name.value)


def extract_fragment_names(node: Node | None) -> list[str]:
    """Names of all fragment spreads below ``node``, in document order."""
    if node is None:
        return []
    collector = _SpreadCollector()
    visit(node, collector)
    return collector.names


class FragmentGraph:
    """Dependency graph of fragment names.

    An edge ``a -> b`` means fragment ``a`` spreads fragment ``b``. Cycles
    are allowed; ordering simply stops following an edge back into the
    fragment currently being visited.
    """

    def __init__(self):
        self._nodes: dict[str, LoadedFragment] = {}
        self._dependencies: dict[str, list[str]] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def has_node(self, name: str) -> bool:
        return name in self._nodes

    def add_node(self, fragment: LoadedFragment):
        self._nodes[fragment.name] = fragment
        self._dependencies.setdefault(fragment.name, [])

    def node_data(self, name: str) -> LoadedFragment:
        try:
            return self._nodes[name]
        except KeyError:
            raise FragmentNotFoundError(name) from None

    def add_dependency(self, dependent: str, dependency: str):
        for name in (dependent, dependency):
            if name not in self._nodes:
                raise FragmentNotFoundError(name)
        edges = self._dependencies[dependent]
        if dependency not in edges:
            edges.append(dependency)

    def dependencies_of(self, name: str) -> list[str]:
        """Direct dependencies of a fragment."""
        self.node_data(name)
        return list(self._dependencies[name])

    def closure(self, names: Iterable[str]) -> list[str]:
        """``names`` plus everything they depend on, in overall order."""
        reachable: set[str] = set()
        pending = list(names)
        while pending:
            name = pending.pop()
            if name in reachable:
                continue
            self.node_data(name)
            reachable.add(name)
            pending.extend(self._dependencies[name])
        return [name for name in self.overall_order() if name in reachable]

    def overall_order(self) -> list[str]:
        """All fragment names, each after the fragments it depends on."""
        order: list[str] = []
        done: set[str] = set()

        def walk(name: str, active: set[str]):
            if name in done or name in active:
                return
            active.add(name)
            for dependency in self._dependencies[name]:
                walk(dependency, active)
            active.discard(name)
            done.add(name)
            order.append(name)

        for name in self._nodes:
            walk(name, set())
        return order

    def cycles(self) -> list[list[str]]:
        """Each dependency cycle, as the chain of names closing it.

        One chain is reported per strongly connected component that has
        more than one fragment or a fragment spreading itself. The chain
        starts at the component's first fragment and follows the shortest
        path back to it.
        """
        return [self.cycle_through(component[0], component) for component in self.cyclic_components()]

    def cyclic_components(self) -> list[list[str]]:
        """Groups of fragments that reach each other, in overall node order."""
        position = {name: i for i, name in enumerate(self._nodes)}
        found = []
        for component in self._components():
            name = component[0]
            if len(component) == 1 and name not in self._dependencies[name]:
                continue
            found.append(sorted(component, key=position.__getitem__))
        found.sort(key=lambda component: position[component[0]])
        return found

    def cycle_through(self, start: str, component: Iterable[str]) -> list[str]:
        """Shortest chain from ``start`` back to itself within ``component``."""
        members = set(component)
        parents: dict[str, str] = {}
        queue = deque([start])
        while queue:
            name = queue.popleft()
            for dependency in self._dependencies[name]:
                if dependency == start:
                    chain = []
                    while name != start:
                        chain.append(name)
                        name = parents[name]
                    return [start, *reversed(chain), start]
                if dependency in members and dependency not in parents:
                    parents[dependency] = name
                    queue.append(dependency)
        raise ValueError(f"Fragment '{start}' is not on a cycle")

    def _components(self) -> list[list[str]]:
        # Tarjan's strongly connected components
        index: dict[str, int] = {}
        low: dict[str, int] = {}
        stack: list[str] = []
        on_stack: set[str] = set()
        components: list[list[str]] = []

        def connect(name: str):
            index[name] = low[name] = len(index)
            stack.append(name)
            on_stack.add(name)
            for dependency in self._dependencies[name]:
                if dependency not in index:
                    connect(dependency)
                    low[name] = min(low[name], low[dependency])
                elif dependency in on_stack:
                    low[name] = min(low[name], index[dependency])
            if low[name] == index[name]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == name:
                        break
                components.append(component)

        for name in self._nodes:
            if name not in index:
                connect(name)
        return components


def fragments_graph(fragments: Iterable[LoadedFragment]) -> FragmentGraph:
    """Build the dependency graph, rejecting conflicting duplicates."""
    fragments = list(fragments)
    graph = FragmentGraph()

    for fragment in fragments:
        if graph.has_node(fragment.name):
            cached = print_ast(graph.node_data(fragment.name).node)
            if cached != print_ast(fragment.node):
                raise DuplicateFragmentError(fragment.name)
            continue
        graph.add_node(fragment)

    for fragment in fragments:
        for name in extract_fragment_names(fragment.node):
            graph.add_dependency(fragment.name, name)

    for chain in graph.cycles():
        log.warning("Fragment cycle detected: %s", " -> ".join(chain))
    return graph


def get_fragments(fragments: Iterable[LoadedFragment]) -> list[FragmentDefinitionNode]:
    """Document-local fragment definitions in dependency order, deduplicated."""
    graph = fragments_graph(fragments)
    local = [name for name in graph.overall_order() if not graph.node_data(name).is_external]
    return [graph.node_data(name).node for name in local]
