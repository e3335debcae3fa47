"""Tests for introspection normalization and the schema model."""

import pytest

from graphdoc import MalformedIntrospectionError, Schema, load_schema, normalize
from graphdoc.type_refs import terminal_of


class TestNormalize:
    """Both payload shapes normalize to the same Schema."""

    def test_raw_payload(self, raw_introspection):
        schema = normalize(raw_introspection)
        assert isinstance(schema, Schema)
        assert schema.query_type.name == "Query"
        assert [t.name for t in schema.types][:3] == ["Query", "User", "Node"]

    def test_wrapped_equals_raw(self, raw_introspection, wrapped_introspection):
        assert normalize(wrapped_introspection) == normalize(raw_introspection)

    def test_wrapped_shape_checked_first(self, raw_introspection):
        payload = {
            "__schema": {"queryType": {"name": "Outer"}, "types": [], "directives": []},
            "data": raw_introspection,
        }
        assert normalize(payload).query_type.name == "Query"

    def test_schema_passes_through(self, raw_introspection):
        schema = normalize(raw_introspection)
        assert normalize(schema) is schema

    @pytest.mark.parametrize("payload", [
        {},
        {"data": {}},
        {"data": None},
        {"schema": {}},
        {"data": {"schema": {}}},
    ])
    def test_unknown_shape_raises(self, payload):
        with pytest.raises(MalformedIntrospectionError):
            normalize(payload)

    def test_non_mapping_raises(self):
        with pytest.raises(MalformedIntrospectionError):
            normalize(["__schema"])

    def test_schema_value_must_be_mapping(self):
        with pytest.raises(MalformedIntrospectionError):
            normalize({"__schema": "nope"})

    def test_invalid_schema_raises(self):
        with pytest.raises(MalformedIntrospectionError) as exc_info:
            normalize({"__schema": {"types": []}})
        assert exc_info.value.__cause__ is not None


class TestSchemaModel:
    """Introspection values are kept, nulls become empty lists."""

    @pytest.fixture
    def schema(self, raw_introspection):
        return normalize(raw_introspection)

    def test_null_lists_become_empty(self, schema):
        id_scalar = schema.get_type("ID")
        assert id_scalar.fields == ()
        assert id_scalar.enum_values == ()
        assert id_scalar.possible_types == ()

    def test_enum_values(self, schema):
        role = schema.get_type("Role")
        assert role.description == "Access level"
        assert [value.name for value in role.enum_values] == ["ADMIN", "GUEST"]

    def test_deprecation(self, schema):
        nick = schema.get_type("User").fields[2]
        assert nick.is_deprecated is True
        assert nick.deprecation_reason == "Use name"

    def test_field_type_resolves_to_id(self, schema):
        id_field = schema.get_type("User").fields[0]
        assert id_field.type.kind == "NON_NULL"
        assert terminal_of(id_field.type).name == "ID"

    def test_default_value_passes_through(self, schema):
        reason = schema.directives[0].args[0]
        assert reason.default_value == '"No longer supported"'

    def test_extra_keys_are_kept(self):
        schema = normalize({"__schema": {
            "queryType": {"name": "Query"},
            "types": [{"kind": "SCALAR", "name": "Date", "specifiedByURL": "https://example.com/date"}],
            "directives": [],
        }})
        assert schema.get_type("Date").specifiedByURL == "https://example.com/date"

    def test_roots(self, schema):
        assert [t.name for t in schema.root_types()] == ["Query"]
        assert schema.root_type_names() == {"Query"}
        assert schema.mutation_type is None

    def test_introspection_type_flag(self, schema):
        assert schema.get_type("__Type").is_introspection_type
        assert not schema.get_type("User").is_introspection_type

    def test_get_unknown_type(self, schema):
        assert schema.get_type("Missing") is None
        assert schema.get_type(None) is None

    def test_schema_is_frozen(self, schema):
        with pytest.raises(Exception):
            schema.query_type = None


@pytest.mark.asyncio
async def test_load_schema_normalizes_loader_output(wrapped_introspection):
    async def loader(options):
        assert options == {"endpoint": "http://localhost/graphql"}
        return wrapped_introspection

    schema = await load_schema(loader, {"endpoint": "http://localhost/graphql"})
    assert schema.query_type.name == "Query"
