"""
Utility functions for the graphdoc build core.
Provides helpers for slugs, environment parsing, and the error taxonomy.
"""
from __future__ import annotations

import logging
import os
import re
from typing import Optional

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"[^a-z0-9_]+")

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


# ============================================================================
# String Utilities
# ============================================================================

def slugify(text: str) -> str:
    """
    Turn a type name into a file-name friendly slug.

    Example:
        slugify("UserConnection") -> "userconnection"
        slugify("__Type") -> "__type"
        slugify("Page Info") -> "page-info"
    """
    return _SLUG_PATTERN.sub("-", text.lower())


# ============================================================================
# Environment Utilities
# ============================================================================

def env_bool(name: str, default: bool) -> bool:
    """
    Read a boolean flag from the environment.

    Raises:
        ValueError: If the variable is set to something that is not a flag
    """
    raw = os.getenv(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {raw!r}")


def env_int(name: str, default: int) -> int:
    """Read an integer from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# ============================================================================
# Error Handling
# ============================================================================

class GraphdocError(Exception):
    """Base exception for graphdoc build errors."""
    pass


class MalformedIntrospectionError(GraphdocError):
    """The introspection payload matches neither the raw nor the wrapped shape."""
    pass


class InvalidTypeRefError(GraphdocError):
    """A type reference chain cannot be resolved to a named type."""

    def __init__(self, message: str, type_name: Optional[str] = None):
        super().__init__(message)
        self.type_name = type_name


class CyclicTypeRefError(InvalidTypeRefError):
    """A type reference chain is deeper than the resolver allows."""
    pass


class PluginInitializationError(GraphdocError):
    """A plugin constructor failed."""

    def __init__(self, plugin: str, cause: BaseException):
        super().__init__(f"Plugin {plugin!r} failed to initialize: {cause}")
        self.plugin = plugin
        self.cause = cause


class PluginExecutionError(GraphdocError):
    """
    A single capability call failed.

    Recovered by the orchestrator: the call contributes nothing and the
    error is reported as a warning attributed to plugin, page and capability.
    `page` is None for the build-wide assets call.
    """

    def __init__(
        self,
        plugin: str,
        capability: str,
        cause: BaseException,
        page: Optional[str] = None,
        *,
        for_index: bool = False,
    ):
        self.plugin = plugin
        self.capability = capability
        self.cause = cause
        self.page = page
        self.for_index = for_index
        super().__init__(
            f"Plugin {plugin!r} failed in {capability} for {self.page_label}: {cause}"
        )

    @property
    def page_label(self) -> str:
        if self.for_index:
            return "index"
        if self.page is None:
            return "build"
        return self.page
