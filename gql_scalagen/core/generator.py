"""Code generator for GraphQL schemas and operations.

Builds generation units from the configuration and documents, runs hooks,
and renders Scala.js source through ``ScalaRenderer``.

Two outputs are supported:
    generator = CodeGenerator(config)
    schema_code = generator.generate_schema()
    operations_code = generator.generate_operations(documents)
"""

from pathlib import Path
from typing import Iterable

from graphql import DocumentNode

from .config import Config
from .enums import EnumGenerationOptions, build_enum_definitions
from .fragments import fragments_graph
from .gql import build_fragment_block
from .hooks import GenerationUnits, HookRunner
from .logger import get_logger
from .operations import OperationsVisitor, RunState, name_wranglings
from .renderer import DEFAULT_IMPORTS, NATIVE_TRAIT_OPTIONS, ScalaRenderer, TraitOptions
from .schema_types import build_object_types, find_input_types, find_interface_types

log = get_logger("generator")

OUTPUT_SUFFIX = ".scala"


def validate_output_file(path: str | Path):
    """Generated code can only be written to ``.scala`` files."""
    if not str(path).endswith(OUTPUT_SUFFIX):
        raise ValueError(f"Output file must have the extension '{OUTPUT_SUFFIX}': {path}")


class CodeGenerator:
    """Generates Scala.js code from a schema and operation documents.

    Example:
        generator = CodeGenerator(config, renderer=ScalaRenderer("./my_templates"))
        generator.write("Operations.scala", generator.generate_operations(documents))
    """

    def __init__(
        self,
        config: Config,
        renderer: ScalaRenderer | None = None,
        hooks: HookRunner | None = None,
        enum_options: EnumGenerationOptions | None = None,
    ):
        self.config = config
        self.renderer = renderer or ScalaRenderer()
        self.hooks = hooks or HookRunner()
        self.enum_options = enum_options or EnumGenerationOptions()
        self.state = RunState()
        self.failed_operations: list[str] = []

    def imports(self) -> list[str]:
        """Import lines for the runtime, mapped scalars, external enums and gqlImport."""
        entries = [*DEFAULT_IMPORTS, *self.config.scalar_imports]
        for override in self.config.enum_values.values():
            if override.source_file:
                identifier = override.source_identifier or override.type_identifier
                entries.append(f"{override.source_file}#{identifier}")
        entries.append(self.config.gql_import)
        return self.renderer.render_imports(entries)

    def _enums(self):
        return build_enum_definitions(
            self.config.schema,
            self.enum_options,
            self.config.enum_values,
            self.config.convert_name,
        )

    def schema_units(self) -> GenerationUnits:
        """Enums, input types, interfaces and object types of the schema."""
        return GenerationUnits(
            enums=self._enums(),
            inputs=find_input_types(self.config),
            interfaces=find_interface_types(self.config) if self.config.separate_interfaces else [],
            objects=build_object_types(self.config),
        )

    def generate_schema(self, filename: str = "Schema.scala") -> str:
        """Render all schema-wide types into one file's content."""
        units = self.hooks.run_pre_hooks(self.schema_units())
        r = self.renderer
        sections = [
            "\n".join(self.imports()),
            *(r.render_enum(e) for e in units.enums),
            *(r.render_trait_spec(t) for t in units.inputs),
            *(r.render_trait_spec(t, TraitOptions(ignore_default_values_in_trait=True)) for t in units.interfaces),
            *(r.render_trait_spec(t, TraitOptions(ignore_default_values_in_trait=True)) for t in units.objects),
        ]
        log.info(
            "Generated %d enums, %d inputs, %d interfaces, %d objects",
            len(units.enums),
            len(units.inputs),
            len(units.interfaces),
            len(units.objects),
        )
        return self.hooks.run_post_hooks(filename, _join(sections))

    def operation_units(self, documents: Iterable[DocumentNode], state: RunState | None = None) -> GenerationUnits:
        """Operation containers for every operation in ``documents``.

        The run's name mappings are kept on ``self.state``.
        """
        graph = fragments_graph(self.config.fragments)
        visitor = OperationsVisitor(self.config, state or RunState(), graph)
        for document in documents:
            visitor.visit_document(document)
        self.state = visitor.state

        fragments = None
        if self.config.isolate_fragments:
            fragments = build_fragment_block(
                self.config.fragments,
                self.config.fragment_object_name,
                self.config.convert_name,
            )
        return GenerationUnits(
            enums=self._enums(),
            inputs=find_input_types(self.config),
            operations=visitor.units,
            fragments=fragments,
        )

    def generate_operations(
        self,
        documents: Iterable[DocumentNode],
        filename: str = "Operations.scala",
        state: RunState | None = None,
    ) -> str:
        """Render the operations of ``documents`` into one file's content."""
        units = self.hooks.run_pre_hooks(self.operation_units(documents, state))
        r = self.renderer
        wranglings = name_wranglings(self.state) if self.config.output_operation_name_wrangling else []
        sections = [
            "\n".join([*self.imports(), *wranglings]),
            *(r.render_enum(e) for e in units.enums),
            r.render_fragment_block(units.fragments) if units.fragments else "",
            *(r.render_trait_spec(t, NATIVE_TRAIT_OPTIONS) for t in units.inputs),
            *(
                r.render_operation(
                    unit,
                    self.config.gql_import,
                    self.config.operation_data_trait_supers,
                    self.config.operation_variables_trait_supers,
                )
                for unit in units.operations
            ),
        ]
        self.failed_operations = [unit.name for unit in units.operations if not unit.ok]
        if self.failed_operations:
            log.warning("%d operation(s) failed: %s", len(self.failed_operations), ", ".join(self.failed_operations))
        return self.hooks.run_post_hooks(filename, _join(sections))

    def write(self, path: str | Path, content: str):
        """Write generated content to a ``.scala`` file."""
        validate_output_file(path)
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content if content.endswith("\n") else content + "\n")
        log.info("Wrote %s", path)


def _join(sections: Iterable[str]) -> str:
    return "\n\n".join(s for s in sections if s)
