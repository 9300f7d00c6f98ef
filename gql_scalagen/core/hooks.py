"""Generation hooks for customizing code generation.

Provides protocols for pre- and post-generation hooks that can modify
the generation units before rendering or transform the rendered code after.

Example usage:
    from gql_scalagen.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop types
    class DropInternalTypes(PreGenerateHook):
        def pre_generate(self, units):
            units.objects = [t for t in units.objects if not t.name.startswith("Internal")]
            return units

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "// Copyright 2024 My Company\\n\\n" + content
"""

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from .enums import EnumDefinition
from .gql import FragmentBlock
from .operations import OperationUnit
from .schema_types import TraitSpec


@dataclass
class GenerationUnits:
    """Everything about to be rendered into one output file."""
    enums: list[EnumDefinition] = field(default_factory=list)
    inputs: list[TraitSpec] = field(default_factory=list)
    interfaces: list[TraitSpec] = field(default_factory=list)
    objects: list[TraitSpec] = field(default_factory=list)
    operations: list[OperationUnit] = field(default_factory=list)
    fragments: FragmentBlock | None = None


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Pre-generation hooks receive the generation units before rendering
    and can modify them. The modified units are then rendered.
    """

    def pre_generate(self, units: GenerationUnits) -> GenerationUnits:
        """Called before rendering.

        Args:
            units: The enums, traits and operations about to be rendered

        Returns:
            The (possibly modified) units to render
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the rendered code for each file
    and can transform it before it's written to disk.
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after rendering for each file.

        Args:
            filename: The name of the generated file (e.g., "Schema.scala")
            content: The generated code content

        Returns:
            The (possibly transformed) code to write
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files.

    Example:
        hook = AddHeaderHook("// Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Built-in hook to filter types and operations by name prefix/suffix.

    Example:
        # Remove all types ending with "Connection"
        hook = FilterTypesHook(exclude_suffix="Connection")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix

    def _should_include(self, name: str) -> bool:
        """Check if a type should be included."""
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, units: GenerationUnits) -> GenerationUnits:
        """Filter units by their generated name."""
        units.enums = [e for e in units.enums if self._should_include(e.name)]
        units.inputs = [t for t in units.inputs if self._should_include(t.name)]
        units.interfaces = [t for t in units.interfaces if self._should_include(t.name)]
        units.objects = [t for t in units.objects if self._should_include(t.name)]
        units.operations = [op for op in units.operations if self._should_include(op.object_name)]
        return units


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreGenerateHook):
        """Add a pre-generation hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, units: GenerationUnits) -> GenerationUnits:
        """Run all pre-generation hooks in order."""
        for hook in self.pre_hooks:
            units = hook.pre_generate(units)
        return units

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
