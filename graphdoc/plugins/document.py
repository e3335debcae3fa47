"""
Built-in document plugins.

SchemaDefinitionDocument shows the GraphQL SDL of the page's type (the
`schema { ... }` block on the index); RequiredByDocument lists the types
that reference it. Sections are plain text; markup is the renderer's job.
"""
from __future__ import annotations

import json
from typing import Iterable, Optional

from ..schema import Description, EnumValue, Field, InputValue, SchemaType, TypeKind
from ..type_refs import terminal_of, type_ref_to_str
from .base import DocumentSection, Plugin

INDENT = "  "


def _deprecation(value: Field | EnumValue) -> str:
    if not value.is_deprecated:
        return ""
    if value.deprecation_reason:
        return f" @deprecated(reason: {json.dumps(value.deprecation_reason)})"
    return " @deprecated"


def _input_value(value: InputValue) -> str:
    text = f"{value.name}: {type_ref_to_str(value.type)}"
    if value.default_value is not None:
        text += f" = {value.default_value}"
    return text


def _field(field: Field) -> str:
    args = ""
    if field.args:
        args = "(" + ", ".join(_input_value(arg) for arg in field.args) + ")"
    return f"{field.name}{args}: {type_ref_to_str(field.type)}{_deprecation(field)}"


def _block(header: str, lines: Iterable[str]) -> str:
    body = "\n".join(f"{INDENT}{line}" for line in lines)
    return f"{header} {{\n{body}\n}}"


def type_definition(schema_type: SchemaType) -> str:
    """Render a named type as GraphQL SDL."""
    kind = schema_type.kind
    name = schema_type.name

    if kind == TypeKind.SCALAR.value:
        return f"scalar {name}"

    if kind == TypeKind.ENUM.value:
        return _block(
            f"enum {name}",
            (f"{value.name}{_deprecation(value)}" for value in schema_type.enum_values),
        )

    if kind == TypeKind.UNION.value:
        members = " | ".join(terminal_of(ref).name for ref in schema_type.possible_types)
        return f"union {name} = {members}"

    if kind == TypeKind.INPUT_OBJECT.value:
        return _block(f"input {name}", (_input_value(value) for value in schema_type.input_fields))

    keyword = "interface" if kind == TypeKind.INTERFACE.value else "type"
    header = f"{keyword} {name}"
    if schema_type.interfaces:
        header += " implements " + " & ".join(terminal_of(ref).name for ref in schema_type.interfaces)
    return _block(header, (_field(field) for field in schema_type.fields))


class SchemaDefinitionDocument(Plugin):
    name = "document.schema"
    title = "GraphQL Schema definition"

    def schema_definition(self) -> str:
        roots = [
            ("query", self.document.query_type),
            ("mutation", self.document.mutation_type),
            ("subscription", self.document.subscription_type),
        ]
        return _block("schema", (f"{op}: {root.name}" for op, root in roots if root is not None))

    def get_documents(self, build_for_type: Optional[str] = None) -> list[DocumentSection]:
        if build_for_type is None:
            return [DocumentSection(self.title, self.schema_definition())]

        schema_type = self.document.get_type(build_for_type)
        if schema_type is None:
            return []
        return [DocumentSection(self.title, type_definition(schema_type))]


def _references(schema_type: SchemaType) -> Iterable[Description]:
    for field in schema_type.fields:
        yield field.type
        for arg in field.args:
            yield arg.type
    for value in schema_type.input_fields:
        yield value.type
    yield from schema_type.interfaces
    yield from schema_type.possible_types


class RequiredByDocument(Plugin):
    name = "document.require-by"
    title = "Required by"

    def required_by(self, type_name: str) -> list[str]:
        """Names of the types that reference `type_name`, sorted."""
        names = set()
        for schema_type in self.document.types:
            if schema_type.is_introspection_type or schema_type.name == type_name:
                continue
            if any(terminal_of(ref).name == type_name for ref in _references(schema_type)):
                names.add(schema_type.name)
        return sorted(names)

    def get_documents(self, build_for_type: Optional[str] = None) -> list[DocumentSection]:
        if build_for_type is None:
            return []

        names = self.required_by(build_for_type)
        if not names:
            return []
        return [DocumentSection(self.title, "\n".join(names))]
