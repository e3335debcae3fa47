"""
graphdoc - plugin core of a GraphQL documentation generator.

This package provides:
- normalize: Turns a raw or wrapped introspection result into a Schema
- TypeRefResolver: Canonical names and URLs for wrapped type references
- Plugin / PluginRegistry: The plugin contract and its ordered configuration
- DocumentationBuild: Runs plugins over every page and merges their output

Quick Start:
    from graphdoc import DocumentationBuild

    result = DocumentationBuild(introspection_json).run()
    for page in result.pages:
        print(page.filename, [s.title for s in page.navigations])
"""

from .schema import (
    Deprecation,
    Description,
    Directive,
    EnumValue,
    Field,
    InputValue,
    Schema,
    SchemaType,
    TypeKind,
    TypeRef,
)
from .introspection import SchemaLoader, load_schema, normalize
from .type_refs import (
    MAX_TYPE_REF_DEPTH,
    ResolvedTypeRef,
    TypeRefResolver,
    default_type_url,
    terminal_of,
    type_ref_to_str,
)
from .plugins import (
    Capability,
    DocumentSection,
    NavigationItem,
    NavigationSection,
    Plugin,
    PluginRegistry,
    get_registry,
    register_plugin,
)
from .aggregator import PageResult, PluginContribution, aggregate_page
from .pipeline import BuildConfig, BuildResult, DocumentationBuild, run_build, run_build_async
from .utils import (
    CyclicTypeRefError,
    GraphdocError,
    InvalidTypeRefError,
    MalformedIntrospectionError,
    PluginExecutionError,
    PluginInitializationError,
)

__version__ = "0.1.0"

__all__ = [
    # Schema model
    "Schema",
    "SchemaType",
    "TypeRef",
    "TypeKind",
    "Field",
    "InputValue",
    "EnumValue",
    "Directive",
    "Description",
    "Deprecation",
    # Normalization
    "normalize",
    "load_schema",
    "SchemaLoader",
    # Type references
    "MAX_TYPE_REF_DEPTH",
    "TypeRefResolver",
    "ResolvedTypeRef",
    "terminal_of",
    "type_ref_to_str",
    "default_type_url",
    # Plugins
    "Plugin",
    "Capability",
    "PluginRegistry",
    "get_registry",
    "register_plugin",
    "NavigationItem",
    "NavigationSection",
    "DocumentSection",
    # Build
    "DocumentationBuild",
    "BuildConfig",
    "BuildResult",
    "PageResult",
    "PluginContribution",
    "aggregate_page",
    "run_build",
    "run_build_async",
    # Errors
    "GraphdocError",
    "MalformedIntrospectionError",
    "InvalidTypeRefError",
    "CyclicTypeRefError",
    "PluginInitializationError",
    "PluginExecutionError",
]
