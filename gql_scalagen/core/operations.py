"""Operation containers.

Each operation in the documents becomes one Scala object holding the
operation string, a ``Variables`` trait when the operation declares
variables, and a ``Data`` trait tree describing the result.
"""

from dataclasses import dataclass, field

from graphql import DocumentNode, OperationDefinitionNode, Visitor, visit

from .config import Config
from .errors import CodegenError
from .fragments import FragmentGraph, fragments_graph
from .gql import make_gql_for_scala, make_gql_inline
from .logger import get_logger
from .naming import pascal_case
from .selections import ResolveContext, selection_set_to_object
from .shapes import DataShape, build_data_shape
from .types import get_root_type
from .variables import PLVariable, variables_from_definitions

log = get_logger("operations")


@dataclass
class RunState:
    """Mutable state of one generation run.

    Unnamed operations are numbered from ``unnamed_counter`` onwards; a new
    run starts a new state and so restarts the numbering.
    """
    unnamed_counter: int = 1
    # Operation name => container name, in first-seen order
    name_mappings: dict[str, str] = field(default_factory=dict)

    def next_unnamed(self) -> str:
        name = f"Unnamed_{self.unnamed_counter}_"
        self.unnamed_counter += 1
        return name


def generate_operation_name(node: OperationDefinitionNode, state: RunState) -> tuple[bool, str]:
    """Return ``(synthesized, name)`` for an operation.

    Anonymous operations get a placeholder name from ``state``.
    """
    if node.name and node.name.value:
        return False, node.name.value
    return True, state.next_unnamed()


@dataclass
class OperationUnit:
    """Everything generated for one operation."""
    name: str
    synthesized: bool
    object_name: str
    operation_type: str
    document: str | None = None
    variables: list[PLVariable] = field(default_factory=list)
    data: DataShape | None = None
    # Set when generation failed; the other parts may then be missing
    error: CodegenError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class OperationsVisitor:
    """Builds an OperationUnit per operation definition.

    Example:
        visitor = OperationsVisitor(config)
        units = visitor.visit_document(document)
        print(visitor.name_wranglings)
    """

    def __init__(self, config: Config, state: RunState | None = None, graph: FragmentGraph | None = None):
        self.config = config
        self.state = state or RunState()
        self.graph = graph if graph is not None else fragments_graph(config.fragments)
        self.context = ResolveContext(
            schema=config.schema,
            fragments=tuple(f.node for f in config.fragments),
            scalars=config.scalars,
            enums=config.enum_values,
        )
        self.units: list[OperationUnit] = []

    def build_document(self, node: OperationDefinitionNode) -> str:
        """Printed operation followed by every fragment it needs.

        Fragments are referenced from the fragment object when isolated,
        otherwise their definitions are printed inline.
        """
        if not self.config.isolate_fragments:
            return make_gql_inline(node, self.graph)
        return make_gql_for_scala(node, self.config.fragment_object_name, self.config.convert_name, self.graph)

    def build_variables(self, node: OperationDefinitionNode) -> list[PLVariable]:
        return variables_from_definitions(self.config.schema, node.variable_definitions, self.config.gen_options())

    def build_data(self, node: OperationDefinitionNode) -> DataShape:
        root_type = get_root_type(node.operation, self.config.schema)
        resolved = selection_set_to_object(self.context, root_type, node.selection_set)
        log.debug(
            "Resolved root of %s: %d leaves, %d complex",
            root_type.name,
            len(resolved.leaves),
            len(resolved.complex),
        )
        return build_data_shape(self.context, resolved, "Data", (), self.config.gen_options())

    def container_name(self, operation_name: str, node: OperationDefinitionNode) -> str:
        """Converted operation name plus the root type suffix, unless already present."""
        root_type = get_root_type(node.operation, self.config.schema)
        root_suffix = pascal_case(root_type.name)
        suffix = "" if operation_name.lower().endswith(root_suffix.lower()) else root_suffix
        return self.config.convert_name(operation_name, suffix=suffix)

    def build_operation(self, node: OperationDefinitionNode) -> OperationUnit:
        """Generate one operation, capturing generation errors in the unit."""
        synthesized, name = generate_operation_name(node, self.state)
        log.info("Processing operation %d: %s", len(self.units) + 1, name)
        unit = OperationUnit(
            name=name,
            synthesized=synthesized,
            object_name=name,
            operation_type=node.operation.value,
        )
        try:
            unit.object_name = self.container_name(name, node)
            unit.document = self.build_document(node)
            unit.variables = self.build_variables(node)
            unit.data = self.build_data(node)
        except CodegenError as e:
            log.error("Error generating operation %s: %s", name, e)
            unit.error = e

        self.state.name_mappings.setdefault(name, unit.object_name)
        self.units.append(unit)
        return unit

    def visit_document(self, document: DocumentNode) -> list[OperationUnit]:
        """Build units for every operation in ``document``, in order."""
        return [self.build_operation(node) for node in find_operations(document)]

    @property
    def name_wranglings(self) -> list[str]:
        return name_wranglings(self.state)


class _OperationCollector(Visitor):
    def __init__(self):
        super().__init__()
        self.nodes: list[OperationDefinitionNode] = []

    def leave_operation_definition(self, node: OperationDefinitionNode, *_args):
        self.nodes.append(node)


def find_operations(document: DocumentNode) -> list[OperationDefinitionNode]:
    """Operation definitions in a document, in document order."""
    collector = _OperationCollector()
    visit(document, collector)
    return collector.nodes


def name_wranglings(state: RunState) -> list[str]:
    """Comment lines listing operation name => container name."""
    return ["// ops mappings:"] + [f"// {name} => {target}" for name, target in state.name_mappings.items()]
