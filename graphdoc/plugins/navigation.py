"""
Built-in navigation plugins.

Each plugin contributes one side-navigation section listing the types of
one kind, sorted by name, with the current page's type marked active.
A section with no types is left out.
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..schema import SchemaType, TypeKind
from .base import NavigationItem, NavigationSection, Plugin


class KindNavigation(Plugin):
    """Navigation section for every documented type of `kind`."""

    title: str = ""
    kind: Optional[TypeKind] = None
    sort_by_name: bool = True

    def select_types(self) -> Iterable[SchemaType]:
        return (
            schema_type
            for schema_type in self.document.types
            if schema_type.kind == self.kind.value and not schema_type.is_introspection_type
        )

    def get_navigations(self, build_for_type: Optional[str] = None) -> list[NavigationSection]:
        types = list(self.select_types())
        if self.sort_by_name:
            types.sort(key=lambda t: t.name)
        if not types:
            return []

        items = [
            NavigationItem(
                text=schema_type.name,
                href=self.url(schema_type),
                is_active=schema_type.name == build_for_type,
            )
            for schema_type in types
        ]
        return [NavigationSection(self.title, items)]


class SchemaNavigation(KindNavigation):
    """The root operation types, in query / mutation / subscription order."""
    name = "navigation.schema"
    title = "Schema"
    sort_by_name = False

    def select_types(self) -> Iterable[SchemaType]:
        return self.document.root_types()


class ScalarNavigation(KindNavigation):
    name = "navigation.scalar"
    title = "Scalars"
    kind = TypeKind.SCALAR


class EnumNavigation(KindNavigation):
    name = "navigation.enum"
    title = "Enums"
    kind = TypeKind.ENUM


class ObjectNavigation(KindNavigation):
    """Object types, except the root operation types listed under Schema."""
    name = "navigation.object"
    title = "Objects"
    kind = TypeKind.OBJECT

    def select_types(self) -> Iterable[SchemaType]:
        roots = self.document.root_type_names()
        return (t for t in super().select_types() if t.name not in roots)


class InterfaceNavigation(KindNavigation):
    name = "navigation.interface"
    title = "Interfaces"
    kind = TypeKind.INTERFACE


class UnionNavigation(KindNavigation):
    name = "navigation.union"
    title = "Unions"
    kind = TypeKind.UNION


class InputNavigation(KindNavigation):
    name = "navigation.input"
    title = "Input Objects"
    kind = TypeKind.INPUT_OBJECT
