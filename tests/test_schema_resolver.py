"""Tests for the schema_resolver module."""

import logging

import pytest

from swagger2angular.exceptions import UnresolvedReferenceError, UnsupportedTypeError
from swagger2angular.schema_resolver import (
    ref_name,
    resolve_definitions,
    resolve_model,
    resolve_type,
    schema_kind,
)


def _props(model):
    return {p.name: p for p in model.properties}


class TestSchemaKind:
    def test_reference(self):
        assert schema_kind({"$ref": "#/definitions/Pet"}) == "reference"

    def test_array(self):
        assert schema_kind({"type": "array", "items": {"type": "string"}}) == "array"

    def test_untyped_items_is_array(self):
        assert schema_kind({"items": {"type": "string"}}) == "array"

    def test_object(self):
        assert schema_kind({"type": "object"}) == "object"

    def test_untyped_properties_is_object(self):
        assert schema_kind({"properties": {}}) == "object"

    def test_primitive(self):
        assert schema_kind({"type": "integer"}) == "primitive"


class TestResolveType:
    """Test single schema node resolution."""

    _DEFS = {"Pet": {"type": "object"}}

    def test_primitive(self):
        info = resolve_type({"type": "integer", "format": "int64"}, self._DEFS, "X")
        assert info.type == "number"
        assert not info.is_array
        assert not info.is_reference

    def test_reference_is_named_not_inlined(self):
        info = resolve_type({"$ref": "#/definitions/Pet"}, self._DEFS, "X")
        assert info.type == "Pet"
        assert info.is_reference
        assert info.reference == "Pet"

    def test_array_of_references(self):
        info = resolve_type({"type": "array", "items": {"$ref": "#/definitions/Pet"}}, self._DEFS, "X")
        assert info.type == "Pet"
        assert info.is_array
        assert info.is_reference
        assert info.annotation == "Pet[]"

    def test_reference_type_name_sanitized(self):
        info = resolve_type({"$ref": "#/definitions/Foo.Bar"}, {"Foo.Bar": {}}, "X")
        assert info.type == "FooBar"
        assert info.reference == "Foo.Bar"

    def test_nested_arrays(self):
        schema = {"type": "array", "items": {"type": "array", "items": {"type": "integer"}}}
        info = resolve_type(schema, self._DEFS, "X")
        assert info.type == "number[]"
        assert info.is_array
        assert info.annotation == "number[][]"

    def test_additional_properties_map(self):
        schema = {"type": "object", "additionalProperties": {"$ref": "#/definitions/Pet"}}
        info = resolve_type(schema, self._DEFS, "X")
        assert info.type == "{ [key: string]: Pet }"
        assert info.reference == "Pet"
        assert not info.is_reference

    def test_single_allof_wraps_reference(self):
        info = resolve_type({"allOf": [{"$ref": "#/definitions/Pet"}]}, self._DEFS, "X")
        assert info.type == "Pet"
        assert info.is_reference

    def test_empty_schema_is_any(self):
        assert resolve_type({}, self._DEFS, "X").type == "any"
        assert resolve_type(None, self._DEFS, "X").type == "any"

    def test_missing_reference(self):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolve_type({"$ref": "#/definitions/Owner"}, self._DEFS, "GET /pets")
        assert exc_info.value.name == "Owner"
        assert exc_info.value.referrer == "GET /pets"

    def test_external_reference_is_unresolved(self):
        with pytest.raises(UnresolvedReferenceError):
            ref_name("other.json#/definitions/Pet", self._DEFS, "X")

    def test_unsupported_type_propagates(self):
        with pytest.raises(UnsupportedTypeError):
            resolve_type({"type": "string", "format": "color"}, self._DEFS, "X")

    def test_fallback_type(self, caplog):
        with caplog.at_level(logging.WARNING, logger="swagger2angular.schema_resolver"):
            info = resolve_type({"type": "string", "format": "color"}, self._DEFS, "X", fallback_type="any")
        assert info.type == "any"
        assert "color" in caplog.text


class TestResolveDefinitions:
    """Test full definition → model descriptor resolution."""

    def test_one_model_per_definition_in_order(self, petstore):
        models = resolve_definitions(petstore["definitions"])
        assert [m.name for m in models] == ["Category", "Tag", "Pet", "Node", "Status"]

    def test_declaration_order_preserved(self):
        definitions = {
            name: {"type": "object", "properties": {}} for name in ("C", "A", "B")
        }
        assert [m.name for m in resolve_definitions(definitions)] == ["C", "A", "B"]

    def test_property_order_preserved(self, petstore):
        pet = resolve_definitions(petstore["definitions"])[2]
        assert [p.name for p in pet.properties] == ["id", "category", "name", "photoUrls", "tags", "status"]

    def test_required_fields(self):
        definitions = {
            "User": {
                "type": "object",
                "required": ["id"],
                "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
            },
        }
        props = _props(resolve_definitions(definitions)[0])
        assert props["id"].required is True
        assert props["name"].required is False

    def test_reference_property(self, petstore):
        props = _props(resolve_definitions(petstore["definitions"])[2])
        assert props["category"].type == "Category"
        assert props["category"].is_reference is True
        assert props["category"].is_array is False

    def test_array_properties(self, petstore):
        props = _props(resolve_definitions(petstore["definitions"])[2])
        assert props["photoUrls"].type == "string"
        assert props["photoUrls"].is_array is True
        assert props["photoUrls"].is_reference is False
        assert props["tags"].type == "Tag"
        assert props["tags"].is_array is True
        assert props["tags"].is_reference is True

    def test_references_collected_in_order(self, petstore):
        pet = resolve_definitions(petstore["definitions"])[2]
        assert pet.references == ["Category", "Tag", "Status"]

    def test_self_reference(self, petstore):
        node = resolve_model("Node", petstore["definitions"]["Node"], petstore["definitions"])
        props = _props(node)
        assert props["parent"].type == "Node"
        assert props["parent"].is_reference is True
        assert props["children"].type == "Node"
        assert props["children"].is_array is True
        assert node.references == []

    def test_mutual_reference(self):
        definitions = {
            "A": {"type": "object", "properties": {"b": {"$ref": "#/definitions/B"}}},
            "B": {"type": "object", "properties": {"a": {"$ref": "#/definitions/A"}}},
        }
        a, b = resolve_definitions(definitions)
        assert a.properties[0].type == "B"
        assert b.properties[0].type == "A"
        assert a.references == ["B"]
        assert b.references == ["A"]

    def test_enum_definition_is_alias(self, petstore):
        status = resolve_definitions(petstore["definitions"])[4]
        assert status.alias == "string"
        assert status.enum == ["available", "pending", "sold"]
        assert status.properties == []

    def test_array_definition_is_alias(self):
        definitions = {
            "Pet": {"type": "object", "properties": {}},
            "Pets": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
        }
        pets = resolve_definitions(definitions)[1]
        assert pets.alias == "Pet[]"
        assert pets.references == ["Pet"]

    def test_map_definition_is_alias(self):
        definitions = {"Counts": {"type": "object", "additionalProperties": {"type": "integer"}}}
        assert resolve_definitions(definitions)[0].alias == "{ [key: string]: number }"

    def test_allof_extends(self):
        definitions = {
            "Base": {"type": "object", "properties": {"id": {"type": "integer"}}},
            "Dog": {
                "allOf": [
                    {"$ref": "#/definitions/Base"},
                    {"type": "object", "required": ["bark"], "properties": {"bark": {"type": "boolean"}}},
                ],
            },
        }
        dog = resolve_definitions(definitions)[1]
        assert dog.extends == ["Base"]
        assert dog.references == ["Base"]
        assert [p.name for p in dog.properties] == ["bark"]
        assert dog.properties[0].required is True

    def test_description_kept(self, petstore):
        pet = resolve_definitions(petstore["definitions"])[2]
        assert pet.description == "A pet for sale"

    def test_dangling_reference(self, dangling_spec):
        with pytest.raises(UnresolvedReferenceError) as exc_info:
            resolve_definitions(dangling_spec["definitions"])
        assert exc_info.value.name == "Owner"
        assert exc_info.value.referrer == "Pet"

    def test_dangling_allof_parent(self):
        definitions = {"Dog": {"allOf": [{"$ref": "#/definitions/Animal"}]}}
        with pytest.raises(UnresolvedReferenceError):
            resolve_definitions(definitions)

    def test_definitions_not_mutated(self, petstore):
        import copy

        before = copy.deepcopy(petstore["definitions"])
        resolve_definitions(petstore["definitions"])
        assert petstore["definitions"] == before
