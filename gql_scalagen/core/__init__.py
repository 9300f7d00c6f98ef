"""Core modules for GraphQL to Scala.js code generation."""

from .config import Config, RawConfig, load_config, make_config
from .errors import (
    CodegenError,
    ConfigurationError,
    DuplicateFragmentError,
    FieldConflictError,
    FieldNotFoundError,
    FragmentCycleError,
    FragmentNotFoundError,
    FragmentTypeMismatchError,
    LoadError,
    MissingRootTypeError,
    NameResolutionError,
    SchemaIntegrityError,
    UnsupportedConstructError,
)
from .fragments import FragmentGraph, LoadedFragment, fragments_graph, get_fragments
from .generator import CodeGenerator, validate_output_file
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    GenerationUnits,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .loader import collect_fragments, load_documents, load_schema
from .operations import OperationsVisitor, OperationUnit, RunState
from .renderer import ScalaRenderer, TraitOptions
from .scalars import (
    DateHandler,
    DateTimeHandler,
    JSONHandler,
    LongHandler,
    MappedScalar,
    ScalarHandler,
    ScalarRegistry,
    UUIDHandler,
)
from .selections import ResolveContext, ResolvedField, ResolvedSelectionSet, resolve_selection_set
from .shapes import DataShape, build_data_shape
from .variables import GenOptions, PLVariable, create_variable, make_gen_options
from .wrappers import NULL_WRAPPER, UNDEF_NULL_WRAPPER, UNDEF_WRAPPER, WrapperPolicy, make_type_wrapper

__all__ = [
    # Configuration
    "Config",
    "RawConfig",
    "load_config",
    "make_config",
    # Errors
    "CodegenError",
    "ConfigurationError",
    "DuplicateFragmentError",
    "FieldConflictError",
    "FieldNotFoundError",
    "FragmentCycleError",
    "FragmentNotFoundError",
    "FragmentTypeMismatchError",
    "LoadError",
    "MissingRootTypeError",
    "NameResolutionError",
    "SchemaIntegrityError",
    "UnsupportedConstructError",
    # Fragments
    "FragmentGraph",
    "LoadedFragment",
    "fragments_graph",
    "get_fragments",
    # Generation
    "CodeGenerator",
    "validate_output_file",
    "ScalaRenderer",
    "TraitOptions",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "GenerationUnits",
    "HookRunner",
    # Loading
    "collect_fragments",
    "load_documents",
    "load_schema",
    # Operations
    "OperationsVisitor",
    "OperationUnit",
    "RunState",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "MappedScalar",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "JSONHandler",
    "LongHandler",
    # Resolution
    "ResolveContext",
    "ResolvedField",
    "ResolvedSelectionSet",
    "resolve_selection_set",
    "DataShape",
    "build_data_shape",
    "GenOptions",
    "PLVariable",
    "create_variable",
    "make_gen_options",
    # Wrappers
    "WrapperPolicy",
    "NULL_WRAPPER",
    "UNDEF_WRAPPER",
    "UNDEF_NULL_WRAPPER",
    "make_type_wrapper",
]
