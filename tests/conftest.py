"""Shared fixtures for swagger2angular tests.

``PETSTORE`` is a small in-memory Swagger 2.0 document covering the
shapes the resolver and grouper care about: references, self-references,
arrays, enums, path-level parameters, body parameters and an untagged
operation.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


PETSTORE: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "basePath": "/v2",
    "paths": {
        "/pets": {
            # post is declared before get on purpose
            "post": {
                "tags": ["Pets"],
                "summary": "Add a new pet",
                "operationId": "addPet",
                "parameters": [
                    {"in": "body", "name": "body", "required": True,
                     "schema": {"$ref": "#/definitions/Pet"}},
                ],
                "responses": {"200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}}},
            },
            "get": {
                "tags": ["Pets"],
                "summary": "List all pets",
                "operationId": "listPets",
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"},
                    {"name": "tags", "in": "query", "type": "array", "items": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "ok",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    },
                },
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "type": "integer", "format": "int64"},
            ],
            "get": {
                "tags": ["Pets"],
                "operationId": "getPetById",
                "responses": {
                    "200": {"description": "ok", "schema": {"$ref": "#/definitions/Pet"}},
                    "404": {"description": "not found"},
                },
            },
            "delete": {
                "tags": ["Pets"],
                "parameters": [{"name": "api_key", "in": "header", "type": "string"}],
                "responses": {"204": {"description": "deleted"}},
            },
        },
        "/store/inventory": {
            "get": {
                "tags": ["Store", "Pets"],
                "operationId": "getInventory",
                "responses": {
                    "200": {
                        "description": "ok",
                        "schema": {
                            "type": "object",
                            "additionalProperties": {"type": "integer", "format": "int32"},
                        },
                    },
                },
            },
        },
        "/health": {
            "get": {
                "operationId": "health",
                "responses": {"200": {"description": "ok"}},
            },
        },
    },
    "definitions": {
        "Category": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
            },
        },
        "Tag": {
            "type": "object",
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
            },
        },
        "Pet": {
            "type": "object",
            "description": "A pet for sale",
            "required": ["name", "photoUrls"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "category": {"$ref": "#/definitions/Category"},
                "name": {"type": "string"},
                "photoUrls": {"type": "array", "items": {"type": "string"}},
                "tags": {"type": "array", "items": {"$ref": "#/definitions/Tag"}},
                "status": {"$ref": "#/definitions/Status"},
            },
        },
        "Node": {
            "type": "object",
            "properties": {
                "value": {"type": "string"},
                "parent": {"$ref": "#/definitions/Node"},
                "children": {"type": "array", "items": {"$ref": "#/definitions/Node"}},
            },
        },
        "Status": {
            "type": "string",
            "enum": ["available", "pending", "sold"],
        },
    },
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the petstore document."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_file(tmp_path, petstore) -> Path:
    """The petstore document written to a JSON file."""
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(petstore))
    return path


@pytest.fixture
def dangling_spec(petstore) -> dict[str, Any]:
    """Petstore with a property referencing a missing definition."""
    petstore["definitions"]["Pet"]["properties"]["owner"] = {"$ref": "#/definitions/Owner"}
    return petstore
