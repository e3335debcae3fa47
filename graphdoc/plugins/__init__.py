"""
Plugins - Pluggable navigation, document, header and asset providers.

Plugins receive the normalized schema once per build and contribute
sections to each generated page. Everything they return is merged in
registration order before it reaches the renderer.

Architecture:
    Introspection → Schema → Plugins (pluggable) → Aggregator → Renderer
                    (fixed)   per page, per capability   (ordered)
"""
from .base import (
    AssetProvider,
    Capability,
    DocumentProvider,
    DocumentSection,
    HeaderProvider,
    NavigationItem,
    NavigationProvider,
    NavigationSection,
    Plugin,
    PluginConstructor,
    supported_capabilities,
)
from .document import RequiredByDocument, SchemaDefinitionDocument
from .navigation import (
    EnumNavigation,
    InputNavigation,
    InterfaceNavigation,
    ObjectNavigation,
    ScalarNavigation,
    SchemaNavigation,
    UnionNavigation,
)
from .registry import PluginInstance, PluginRegistry, get_registry, register_plugin

DEFAULT_PLUGINS = [
    SchemaNavigation,
    ScalarNavigation,
    EnumNavigation,
    ObjectNavigation,
    InterfaceNavigation,
    UnionNavigation,
    InputNavigation,
    SchemaDefinitionDocument,
    RequiredByDocument,
]

__all__ = [
    # Base classes
    "Plugin",
    "PluginConstructor",
    "Capability",
    "supported_capabilities",
    "NavigationProvider",
    "DocumentProvider",
    "HeaderProvider",
    "AssetProvider",
    # Output records
    "NavigationItem",
    "NavigationSection",
    "DocumentSection",
    # Registry
    "PluginRegistry",
    "PluginInstance",
    "get_registry",
    "register_plugin",
    # Built-in plugins
    "DEFAULT_PLUGINS",
    "SchemaNavigation",
    "ScalarNavigation",
    "EnumNavigation",
    "ObjectNavigation",
    "InterfaceNavigation",
    "UnionNavigation",
    "InputNavigation",
    "SchemaDefinitionDocument",
    "RequiredByDocument",
]
