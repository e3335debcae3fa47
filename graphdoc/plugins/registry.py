"""
Plugin Registry - Ordered plugin configuration for a build.

Registration order is significant: plugins are instantiated, invoked and
merged in the order they were registered. Loading plugin modules is the
configuration loader's job; the registry only receives constructors.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..schema import Schema
from ..utils import PluginInitializationError
from .base import Capability, PluginConstructor, plugin_name, supported_capabilities

logger = logging.getLogger(__name__)


@dataclass
class PluginEntry:
    """A configured plugin: its constructor plus the opaque package metadata."""
    name: str
    constructor: PluginConstructor
    graphdoc_package: Any = None
    project_package: Any = None


@dataclass
class PluginInstance:
    """A constructed plugin together with its position and capability set."""
    name: str
    index: int
    plugin: Any
    capabilities: frozenset[Capability]

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities


class PluginRegistry:
    """
    Registry of plugin constructors.

    Usage:
        registry = PluginRegistry()
        registry.register(MyPlugin, graphdoc_package={"version": "2.4.0"})

        instances = registry.instantiate(schema)
    """

    def __init__(self):
        self._entries: list[PluginEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[PluginEntry]:
        return list(self._entries)

    def register(
        self,
        constructor: PluginConstructor,
        graphdoc_package: Any = None,
        project_package: Any = None,
        name: Optional[str] = None,
    ) -> PluginEntry:
        """
        Register a plugin constructor.

        Args:
            constructor: Callable taking (document, graphdoc_package, project_package)
            graphdoc_package: Opaque generator package metadata
            project_package: Opaque project package metadata
            name: Identity used in logs and errors (defaults to the plugin's name)

        Returns:
            The registered entry
        """
        base_name = name or plugin_name(constructor)
        entry_name = base_name
        taken = {entry.name for entry in self._entries}
        suffix = 2
        while entry_name in taken:
            entry_name = f"{base_name}#{suffix}"
            suffix += 1

        entry = PluginEntry(
            name=entry_name,
            constructor=constructor,
            graphdoc_package=graphdoc_package,
            project_package=project_package,
        )
        self._entries.append(entry)
        logger.debug(f"Registered plugin: {entry_name} (position={len(self._entries)})")
        return entry

    def unregister(self, name: str) -> bool:
        """
        Unregister a plugin by name.

        Returns:
            True if a plugin was removed, False otherwise
        """
        original_count = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.name != name]
        return len(self._entries) < original_count

    def get(self, name: str) -> Optional[PluginEntry]:
        """Get a plugin entry by name."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def list_plugins(self) -> list[dict]:
        """List all registered plugins with their position."""
        return [
            {"name": entry.name, "position": position}
            for position, entry in enumerate(self._entries)
        ]

    def instantiate(self, document: Schema) -> list[PluginInstance]:
        """
        Construct every registered plugin, in registration order.

        Raises:
            PluginInitializationError: If a constructor fails
        """
        instances = []
        for index, entry in enumerate(self._entries):
            try:
                plugin = entry.constructor(document, entry.graphdoc_package, entry.project_package)
            except Exception as e:
                raise PluginInitializationError(entry.name, e) from e

            capabilities = supported_capabilities(plugin)
            logger.debug(
                f"Instantiated plugin {entry.name}: "
                f"{sorted(c.value for c in capabilities) or 'no capabilities'}"
            )
            instances.append(PluginInstance(
                name=entry.name,
                index=index,
                plugin=plugin,
                capabilities=capabilities,
            ))

        logger.info(f"Instantiated {len(instances)} plugins")
        return instances


# Global registry instance
_global_registry: Optional[PluginRegistry] = None


def get_registry() -> PluginRegistry:
    """Get the global plugin registry, creating it with the built-in plugins if needed."""
    global _global_registry

    if _global_registry is None:
        _global_registry = PluginRegistry()
        _setup_default_plugins(_global_registry)

    return _global_registry


def _setup_default_plugins(registry: PluginRegistry) -> None:
    """Register the built-in plugins."""
    # Import here to avoid circular imports
    from . import DEFAULT_PLUGINS

    for constructor in DEFAULT_PLUGINS:
        registry.register(constructor)

    logger.info(f"Registered {len(registry)} built-in plugins")


def register_plugin(
    constructor: PluginConstructor,
    graphdoc_package: Any = None,
    project_package: Any = None,
    name: Optional[str] = None,
) -> PluginEntry:
    """Convenience function to register a plugin in the global registry."""
    return get_registry().register(
        constructor,
        graphdoc_package=graphdoc_package,
        project_package=project_package,
        name=name,
    )
