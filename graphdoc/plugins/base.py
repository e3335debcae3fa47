"""
Base classes for the plugin system.

This defines the records plugins produce, the four optional capabilities a
plugin may implement, and the `Plugin` base class that gives every plugin
its read-only build context.

A plugin is constructed once per build:

    plugin = MyPlugin(schema, graphdoc_package, project_package)

and may then implement any subset of:

    get_navigations(build_for_type=None) -> list[NavigationSection]
    get_documents(build_for_type=None)   -> list[DocumentSection]
    get_headers(build_for_type=None)     -> list[str]
    get_assets()                         -> list[str]  (absolute paths)

Each may return the list directly or a coroutine/awaitable of it.
`build_for_type` is None while the index page is generated and the type's
name while that type's page is generated. `get_assets` runs once per build,
before any page; the other three run once per page.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence, Union, runtime_checkable

from ..schema import Description, Schema, SchemaType
from ..type_refs import ResolvedTypeRef, TypeRefResolver, default_type_url


@dataclass
class NavigationItem:
    """
    A link in the side navigation.

    `is_active` marks the item of the page being generated.
    """
    text: str
    href: str
    is_active: bool = False


@dataclass
class NavigationSection:
    """A titled group of navigation links."""
    title: str
    items: list[NavigationItem] = field(default_factory=list)


@dataclass
class DocumentSection:
    """A titled block of the main content area."""
    title: str
    description: str


class Capability(str, Enum):
    """
    Optional plugin capabilities.

    The value is the capability name used in logs and errors; `method` is
    the attribute a plugin implements.
    """
    NAVIGATIONS = "navigations"
    DOCUMENTS = "documents"
    HEADERS = "headers"
    ASSETS = "assets"

    @property
    def method(self) -> str:
        return f"get_{self.value}"


PAGE_CAPABILITIES = (Capability.NAVIGATIONS, Capability.DOCUMENTS, Capability.HEADERS)


@runtime_checkable
class NavigationProvider(Protocol):
    def get_navigations(
        self, build_for_type: Optional[str] = None
    ) -> Union[Sequence[NavigationSection], Awaitable[Sequence[NavigationSection]]]:
        ...


@runtime_checkable
class DocumentProvider(Protocol):
    def get_documents(
        self, build_for_type: Optional[str] = None
    ) -> Union[Sequence[DocumentSection], Awaitable[Sequence[DocumentSection]]]:
        ...


@runtime_checkable
class HeaderProvider(Protocol):
    def get_headers(
        self, build_for_type: Optional[str] = None
    ) -> Union[Sequence[str], Awaitable[Sequence[str]]]:
        ...


@runtime_checkable
class AssetProvider(Protocol):
    def get_assets(self) -> Union[Sequence[str], Awaitable[Sequence[str]]]:
        ...


# Constructor contract: (document, graphdoc_package, project_package) -> plugin.
# Both package values are opaque metadata handed through untouched.
PluginConstructor = Callable[[Schema, Any, Any], Any]


def supported_capabilities(plugin: Any) -> frozenset[Capability]:
    """
    The capabilities a plugin instance implements.

    A capability counts only when its method is present and callable, so a
    plugin may also opt out by setting the attribute to None.
    """
    return frozenset(
        capability
        for capability in Capability
        if callable(getattr(plugin, capability.method, None))
    )


def plugin_name(plugin: Any) -> str:
    """Human-readable identity of a plugin instance or constructor."""
    name = getattr(plugin, "name", None)
    if isinstance(name, str) and name:
        return name
    if isinstance(plugin, type):
        return plugin.__name__
    return getattr(plugin, "__name__", None) or type(plugin).__name__


class Plugin:
    """
    Base class for plugins.

    Provides the build context every plugin gets:
        - document: the normalized Schema
        - url(ref): documentation URL for a type reference
        - query_type / mutation_type / subscription_type: the root types,
          None when the schema has no such root

    It implements none of the capabilities; subclasses add the ones they need.

    Example:
        class HelloPlugin(Plugin):
            def get_headers(self, build_for_type=None):
                return ['<meta name="generator" content="graphdoc">']
    """

    # Human-readable name for logs and error attribution
    name: str = ""

    def __init__(self, document: Schema, graphdoc_package: Any = None, project_package: Any = None):
        self.document = document
        self.graphdoc_package = graphdoc_package
        self.project_package = project_package

        self.query_type: Optional[SchemaType] = self._root(document.query_type)
        self.mutation_type: Optional[SchemaType] = self._root(document.mutation_type)
        self.subscription_type: Optional[SchemaType] = self._root(document.subscription_type)

        self._resolver = TypeRefResolver(self.url)

        if not self.name:
            self.name = type(self).__name__

    def _root(self, root: Optional[Description]) -> Optional[SchemaType]:
        if root is None:
            return None
        return self.document.get_type(root.name)

    def url(self, ref: Description) -> str:
        """Documentation URL of the type behind `ref`. Override to change page naming."""
        return default_type_url(ref)

    def resolve(self, ref: Description) -> ResolvedTypeRef:
        return self._resolver.resolve(ref)
