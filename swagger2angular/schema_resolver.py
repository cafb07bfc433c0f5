"""Resolve Swagger definitions into model descriptors.

Handles:
- Primitive types via the type mapper
- Arrays (nested arrays included)
- $ref to other definitions, by name only (never inlined)
- allOf composition (refs become parents, inline parts add properties)
- additionalProperties maps
- Non-object definitions (aliases and enums)

Self-referential and mutually-referential definitions need no special
handling: a reference resolves to the target's name and stops there.
"""

from __future__ import annotations

import logging
from typing import Any

from .exceptions import UnresolvedReferenceError, UnsupportedTypeError
from .models import ModelDescriptor, PropertyDescriptor, TypeInfo
from .naming import type_name
from .type_mapper import map_type

logger = logging.getLogger(__name__)

REF_PREFIX = "#/definitions/"


def schema_kind(schema: dict[str, Any]) -> str:
    """Classify a schema node as reference, array, object or primitive."""
    if "$ref" in schema:
        return "reference"
    schema_type = schema.get("type")
    if schema_type == "array" or (schema_type is None and "items" in schema):
        return "array"
    if schema_type == "object" or (
        schema_type is None
        and ("properties" in schema or "allOf" in schema or "additionalProperties" in schema)
    ):
        return "object"
    return "primitive"


def ref_name(ref: str, definitions: dict[str, Any], referrer: str) -> str:
    """Resolve a ``$ref`` string to a definition name by lookup."""
    if not ref.startswith(REF_PREFIX):
        raise UnresolvedReferenceError(ref, referrer)
    name = ref[len(REF_PREFIX):]
    if name not in definitions:
        raise UnresolvedReferenceError(name, referrer)
    return name


def _map_primitive(
    schema: dict[str, Any],
    owner: str,
    fallback_type: str | None,
) -> str:
    schema_type = schema.get("type", "object")
    try:
        return map_type(schema_type, schema.get("format"))
    except UnsupportedTypeError as exc:
        if fallback_type is None:
            raise
        logger.warning("%s in %s, using %r", exc, owner, fallback_type)
        return fallback_type


def resolve_type(
    schema: dict[str, Any] | None,
    definitions: dict[str, Any],
    owner: str,
    fallback_type: str | None = None,
) -> TypeInfo:
    """Resolve one schema node to a :class:`TypeInfo`.

    Args:
        schema: The schema node (``None`` or ``{}`` means free-form).
        definitions: The document's ``definitions`` mapping, for lookups.
        owner: Model or operation name, reported on unresolved references.
        fallback_type: Substituted for unsupported primitive types when set.
    """
    if not schema:
        return TypeInfo(type=map_type("object"))

    kind = schema_kind(schema)

    if kind == "reference":
        name = ref_name(schema["$ref"], definitions, owner)
        return TypeInfo(type=type_name(name), is_reference=True, reference=name)

    if kind == "array":
        element = resolve_type(schema.get("items"), definitions, owner, fallback_type)
        return TypeInfo(
            type=element.annotation,
            is_array=True,
            is_reference=element.is_reference,
            reference=element.reference,
        )

    if kind == "object":
        members = schema.get("allOf", [])
        # {"allOf": [{"$ref": ...}]} wraps a single reference
        if len(members) == 1 and "properties" not in schema:
            return resolve_type(members[0], definitions, owner, fallback_type)
        extra = schema.get("additionalProperties")
        if isinstance(extra, dict):
            value = resolve_type(extra, definitions, owner, fallback_type)
            return TypeInfo(
                type=f"{{ [key: string]: {value.annotation} }}",
                reference=value.reference,
            )
        return TypeInfo(type=map_type("object"))

    return TypeInfo(type=_map_primitive(schema, owner, fallback_type))


def _add_reference(references: list[str], info: TypeInfo, model_name: str) -> None:
    if info.reference and info.reference != model_name and info.reference not in references:
        references.append(info.reference)


def _object_parts(
    name: str,
    schema: dict[str, Any],
    definitions: dict[str, Any],
) -> tuple[list[str], list[tuple[dict[str, Any], set[str]]]]:
    """Split an object schema into allOf parents and property blocks."""
    extends: list[str] = []
    blocks: list[tuple[dict[str, Any], set[str]]] = []
    for sub in schema.get("allOf", []):
        if "$ref" in sub:
            extends.append(ref_name(sub["$ref"], definitions, name))
        else:
            blocks.append((sub.get("properties", {}), set(sub.get("required", []))))
    if "properties" in schema:
        blocks.append((schema["properties"], set(schema.get("required", []))))
    return extends, blocks


def resolve_model(
    name: str,
    schema: dict[str, Any],
    definitions: dict[str, Any],
    fallback_type: str | None = None,
) -> ModelDescriptor:
    """Build the descriptor for a single definition."""
    description = schema.get("description", "")

    if schema_kind(schema) != "object" or (
        "additionalProperties" in schema and "properties" not in schema and "allOf" not in schema
    ):
        info = resolve_type(schema, definitions, name, fallback_type)
        enum = schema.get("enum")
        references: list[str] = []
        _add_reference(references, info, name)
        return ModelDescriptor(
            name=name,
            description=description,
            alias=info.annotation,
            enum=list(enum) if enum else None,
            references=references,
        )

    extends, blocks = _object_parts(name, schema, definitions)
    properties: list[PropertyDescriptor] = []
    references = [parent for parent in extends if parent != name]

    for props, required in blocks:
        for prop_name, prop_schema in props.items():
            info = resolve_type(prop_schema, definitions, name, fallback_type)
            _add_reference(references, info, name)
            properties.append(PropertyDescriptor(
                name=prop_name,
                type=info.type,
                required=prop_name in required,
                is_array=info.is_array,
                is_reference=info.is_reference,
                description=prop_schema.get("description", ""),
            ))

    return ModelDescriptor(
        name=name,
        properties=properties,
        description=description,
        references=references,
        extends=extends,
    )


def resolve_definitions(
    definitions: dict[str, Any],
    fallback_type: str | None = None,
) -> list[ModelDescriptor]:
    """Resolve every definition, in declaration order.

    Raises:
        UnresolvedReferenceError: On the first reference to a missing definition.
        UnsupportedTypeError: On an unmapped primitive when no fallback is set.
    """
    models: list[ModelDescriptor] = []
    for name, schema in definitions.items():
        model = resolve_model(name, schema, definitions, fallback_type)
        logger.debug("Resolved model %s (%d properties)", name, len(model.properties))
        models.append(model)
    return models
