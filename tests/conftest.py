"""Shared fixtures: a small introspection result in both payload shapes."""

import copy

import pytest


def named(kind, name):
    return {"kind": kind, "name": name, "ofType": None}


def non_null(of_type):
    return {"kind": "NON_NULL", "name": None, "ofType": of_type}


def list_of(of_type):
    return {"kind": "LIST", "name": None, "ofType": of_type}


def wrap(depth, terminal=None):
    """A type reference with `depth` alternating wrapper links."""
    ref = terminal or named("SCALAR", "ID")
    for i in range(depth):
        ref = list_of(ref) if i % 2 else non_null(ref)
    return ref


def field(name, type_ref, args=None, deprecated=False, reason=None):
    return {
        "name": name,
        "description": None,
        "args": args or [],
        "type": type_ref,
        "isDeprecated": deprecated,
        "deprecationReason": reason,
    }


def object_type(name, fields, kind="OBJECT", interfaces=None):
    return {
        "kind": kind,
        "name": name,
        "description": None,
        "fields": fields,
        "inputFields": None,
        "interfaces": interfaces or [],
        "enumValues": None,
        "possibleTypes": None,
    }


SCHEMA = {
    "queryType": {"name": "Query"},
    "mutationType": None,
    "subscriptionType": None,
    "types": [
        object_type("Query", [
            field("user", named("OBJECT", "User"), args=[
                {"name": "id", "description": None, "type": non_null(named("SCALAR", "ID")), "defaultValue": None},
            ]),
            field("users", non_null(list_of(non_null(named("OBJECT", "User"))))),
        ]),
        object_type("User", [
            field("id", non_null(named("SCALAR", "ID"))),
            field("role", named("ENUM", "Role")),
            field("nick", named("SCALAR", "String"), deprecated=True, reason="Use name"),
        ], interfaces=[named("INTERFACE", "Node")]),
        object_type("Node", [field("id", non_null(named("SCALAR", "ID")))], kind="INTERFACE"),
        {
            "kind": "ENUM",
            "name": "Role",
            "description": "Access level",
            "fields": None,
            "inputFields": None,
            "interfaces": None,
            "enumValues": [
                {"name": "ADMIN", "description": None, "isDeprecated": False, "deprecationReason": None},
                {"name": "GUEST", "description": None, "isDeprecated": False, "deprecationReason": None},
            ],
            "possibleTypes": None,
        },
        {"kind": "SCALAR", "name": "ID", "description": None, "fields": None, "inputFields": None,
         "interfaces": None, "enumValues": None, "possibleTypes": None},
        {"kind": "SCALAR", "name": "String", "description": None, "fields": None, "inputFields": None,
         "interfaces": None, "enumValues": None, "possibleTypes": None},
        object_type("__Type", [field("name", named("SCALAR", "String"))]),
    ],
    "directives": [
        {
            "name": "deprecated",
            "description": None,
            "locations": ["FIELD_DEFINITION", "ENUM_VALUE"],
            "args": [{"name": "reason", "description": None, "type": named("SCALAR", "String"),
                      "defaultValue": "\"No longer supported\""}],
        },
    ],
}


@pytest.fixture
def raw_introspection():
    return {"__schema": copy.deepcopy(SCHEMA)}


@pytest.fixture
def wrapped_introspection():
    return {"data": {"__schema": copy.deepcopy(SCHEMA)}}
