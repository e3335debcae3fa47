"""
Schema data model - the canonical form of a GraphQL introspection result.

Every plugin reads the same immutable graph, so all records are frozen
pydantic models. They validate straight from introspection JSON (camelCase
keys) and can also be built by field name in Python code:

    TypeRef.model_validate({"kind": "NON_NULL", "ofType": {"kind": "SCALAR", "name": "ID"}})
    TypeRef(kind="NON_NULL", of_type=TypeRef(kind="SCALAR", name="ID"))

Lists that GraphQL reports as null for kinds they do not apply to
(`fields` of a SCALAR, `enumValues` of an OBJECT, ...) become empty tuples.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class TypeKind(str, Enum):
    """The `__TypeKind` values of GraphQL introspection."""
    SCALAR = "SCALAR"
    OBJECT = "OBJECT"
    INTERFACE = "INTERFACE"
    UNION = "UNION"
    ENUM = "ENUM"
    INPUT_OBJECT = "INPUT_OBJECT"
    LIST = "LIST"
    NON_NULL = "NON_NULL"


WRAPPER_KINDS = frozenset({TypeKind.LIST.value, TypeKind.NON_NULL.value})
NAMED_KINDS = frozenset(kind.value for kind in TypeKind) - WRAPPER_KINDS


def _empty_if_none(value: Any) -> Any:
    return () if value is None else value


class _SchemaModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class Description(_SchemaModel):
    """Named, described, kind-tagged base shared by every schema record."""
    name: Optional[str] = None
    description: Optional[str] = None
    kind: Optional[str] = None


class Deprecation(_SchemaModel):
    is_deprecated: bool = False
    deprecation_reason: Optional[str] = None


class TypeRef(Description):
    """
    A reference to a type, possibly wrapped in LIST / NON_NULL modifiers.

    Wrappers link to the type they modify through `of_type`; the chain ends
    at a named type without `of_type`. `[User!]!` is:

        NON_NULL -> LIST -> NON_NULL -> OBJECT "User"
    """
    of_type: Optional[TypeRef] = None

    @property
    def is_wrapper(self) -> bool:
        return self.kind in WRAPPER_KINDS


class InputValue(Description):
    type: TypeRef
    default_value: Optional[Union[str, int, float]] = None


class Field(Description, Deprecation):
    type: TypeRef
    args: tuple[InputValue, ...] = ()

    @field_validator("args", mode="before")
    @classmethod
    def empty_lists(cls, value: Any) -> Any:
        return _empty_if_none(value)


class EnumValue(Description, Deprecation):
    pass


class Directive(Description):
    locations: tuple[str, ...] = ()
    args: tuple[InputValue, ...] = ()

    @field_validator("locations", "args", mode="before")
    @classmethod
    def empty_lists(cls, value: Any) -> Any:
        return _empty_if_none(value)


class SchemaType(Description):
    """
    A named type of the schema.

    Only the lists that apply to the type's kind are populated: `fields` for
    OBJECT and INTERFACE, `input_fields` for INPUT_OBJECT, `enum_values` for
    ENUM, `possible_types` for UNION and INTERFACE.
    """
    fields: tuple[Field, ...] = ()
    input_fields: tuple[InputValue, ...] = ()
    interfaces: tuple[TypeRef, ...] = ()
    enum_values: tuple[EnumValue, ...] = ()
    possible_types: tuple[TypeRef, ...] = ()

    @field_validator(
        "fields", "input_fields", "interfaces", "enum_values", "possible_types",
        mode="before",
    )
    @classmethod
    def empty_lists(cls, value: Any) -> Any:
        return _empty_if_none(value)

    @property
    def is_introspection_type(self) -> bool:
        """True for the built-in `__Schema`, `__Type`, ... types."""
        return bool(self.name) and self.name.startswith("__")


class Schema(_SchemaModel):
    """The normalized schema of one build. Created once, never mutated."""
    query_type: Description
    mutation_type: Optional[Description] = None
    subscription_type: Optional[Description] = None
    types: tuple[SchemaType, ...] = ()
    directives: tuple[Directive, ...] = ()

    @field_validator("types", "directives", mode="before")
    @classmethod
    def empty_lists(cls, value: Any) -> Any:
        return _empty_if_none(value)

    def get_type(self, name: Optional[str]) -> Optional[SchemaType]:
        """Find a type by name."""
        if name is None:
            return None
        for schema_type in self.types:
            if schema_type.name == name:
                return schema_type
        return None

    def root_types(self) -> list[SchemaType]:
        """The query, mutation and subscription types that exist, in that order."""
        roots = []
        for root in (self.query_type, self.mutation_type, self.subscription_type):
            if root is None:
                continue
            schema_type = self.get_type(root.name)
            if schema_type is not None:
                roots.append(schema_type)
        return roots

    def root_type_names(self) -> set[str]:
        return {
            root.name
            for root in (self.query_type, self.mutation_type, self.subscription_type)
            if root is not None and root.name
        }
