"""Group Swagger operations into resource descriptors by tag.

Paths are walked in declaration order and verbs in a fixed canonical
order, so method order never depends on how a parser ordered the keys
of a single path object.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from .exceptions import UnresolvedReferenceError
from .models import MethodDescriptor, ParameterDescriptor, ResourceDescriptor
from .naming import build_operation_id, deduplicate, to_identifier
from .schema_resolver import resolve_type

logger = logging.getLogger(__name__)

DEFAULT_VERB_ORDER: tuple[str, ...] = ("get", "post", "put", "patch", "delete", "head", "options")

DEFAULT_TAG = "default"

TAG_POLICIES = ("first", "all")

_PATH_PARAM = re.compile(r"\{([^}]+)\}")

PARAMETER_REF_PREFIX = "#/parameters/"

# locals declared by the built-in resource template
TEMPLATE_LOCALS = ("queryParams", "requestHeaders", "formData")


def _operation_tags(operation: dict[str, Any], tag_policy: str, default_tag: str) -> list[str]:
    """Tags an operation is listed under."""
    tags = [t for t in operation.get("tags", []) if t]
    if not tags:
        return [default_tag]
    if tag_policy == "all":
        return list(dict.fromkeys(tags))
    return tags[:1]


def _resolve_parameters(
    params: list[dict[str, Any]],
    shared: dict[str, Any],
    owner: str,
) -> list[dict[str, Any]]:
    """Replace ``#/parameters/`` references with the shared parameter."""
    resolved = []
    for param in params:
        ref = param.get("$ref")
        if ref is None:
            resolved.append(param)
            continue
        if not ref.startswith(PARAMETER_REF_PREFIX):
            raise UnresolvedReferenceError(ref, owner)
        name = ref[len(PARAMETER_REF_PREFIX):]
        if name not in shared:
            raise UnresolvedReferenceError(name, owner)
        resolved.append(shared[name])
    return resolved


def _merge_parameters(
    path_params: list[dict[str, Any]],
    operation_params: list[dict[str, Any]],
) -> list[dict[str, Any]]:
    """Merge path-level parameters into an operation's own.

    Operation parameters override path parameters with the same name and
    location; the merged list keeps path-level order first.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for param in path_params:
        merged[(param.get("name", ""), param.get("in", "query"))] = param
    for param in operation_params:
        merged[(param.get("name", ""), param.get("in", "query"))] = param
    return list(merged.values())


def _parameter_schema(param: dict[str, Any]) -> dict[str, Any]:
    """Schema node describing a non-body parameter."""
    if "schema" in param:
        return param["schema"]
    return {k: v for k, v in param.items() if k in ("type", "format", "items", "enum")}


def _response_schema(operation: dict[str, Any]) -> dict[str, Any] | None:
    """Schema of the first declared 2xx response that has one."""
    for status, response in operation.get("responses", {}).items():
        if str(status).startswith("2") and isinstance(response, dict) and "schema" in response:
            return response["schema"]
    return None


def _url_template(path: str, identifiers: dict[str, str]) -> str:
    return _PATH_PARAM.sub(
        lambda m: "${" + identifiers.get(m.group(1), to_identifier(m.group(1))) + "}",
        path,
    )


def build_method(
    verb: str,
    path: str,
    operation: dict[str, Any],
    path_params: list[dict[str, Any]],
    definitions: dict[str, Any],
    fallback_type: str | None = None,
    shared_parameters: dict[str, Any] | None = None,
) -> tuple[MethodDescriptor, list[str]]:
    """Build one method descriptor and the model names it references.

    Argument identifiers never collide with each other or with
    :data:`TEMPLATE_LOCALS`.
    """
    owner = f"{verb.upper()} {path}"
    references: list[str] = []
    parameters: list[ParameterDescriptor] = []
    request_body_type = None

    shared_parameters = shared_parameters or {}
    raw_params = _merge_parameters(
        _resolve_parameters(path_params, shared_parameters, owner),
        _resolve_parameters(operation.get("parameters", []), shared_parameters, owner),
    )
    identifiers = deduplicate(
        list(TEMPLATE_LOCALS) + [to_identifier(p.get("name", "")) for p in raw_params],
        separator="",
    )[len(TEMPLATE_LOCALS):]

    for param, identifier in zip(raw_params, identifiers):
        location = param.get("in", "query")
        if location == "body":
            info = resolve_type(param.get("schema"), definitions, owner, fallback_type)
            request_body_type = info.annotation
        else:
            info = resolve_type(_parameter_schema(param), definitions, owner, fallback_type)
        if info.reference and info.reference not in references:
            references.append(info.reference)
        parameters.append(ParameterDescriptor(
            name=param.get("name", ""),
            location=location,
            type=info.annotation,
            required=bool(param.get("required", location == "path")),
            identifier=identifier,
        ))

    response_type = None
    response_schema = _response_schema(operation)
    if response_schema is not None:
        info = resolve_type(response_schema, definitions, owner, fallback_type)
        response_type = info.annotation
        if info.reference and info.reference not in references:
            references.append(info.reference)

    path_identifiers = {p.name: p.identifier for p in parameters if p.location == "path"}
    method = MethodDescriptor(
        http_method=verb.upper(),
        path_template=path,
        operation_id=to_identifier(operation.get("operationId") or build_operation_id(verb, path)),
        parameters=parameters,
        request_body_type=request_body_type,
        response_type=response_type,
        url_template=_url_template(path, path_identifiers),
        summary=operation.get("summary", ""),
    )
    return method, references


def _unique_operation_ids(methods: list[MethodDescriptor]) -> list[MethodDescriptor]:
    """Ensure operation ids are unique within one resource."""
    ids = deduplicate([m.operation_id for m in methods], separator="")
    return [
        m if m.operation_id == new_id else m.model_copy(update={"operation_id": new_id})
        for m, new_id in zip(methods, ids)
    ]


def group_paths(
    paths: dict[str, Any],
    definitions: dict[str, Any],
    verb_order: Iterable[str] = DEFAULT_VERB_ORDER,
    tag_policy: str = "first",
    default_tag: str = DEFAULT_TAG,
    fallback_type: str | None = None,
    shared_parameters: dict[str, Any] | None = None,
) -> list[ResourceDescriptor]:
    """Group all operations into resource descriptors.

    Resources appear in the order their first operation is met; methods
    keep path declaration order, then canonical verb order.

    Raises:
        UnresolvedReferenceError: If a parameter or response references a
            missing definition or shared parameter.
    """
    verbs = [v.lower() for v in verb_order]
    methods: dict[str, list[MethodDescriptor]] = {}
    references: dict[str, list[str]] = {}

    for path, path_item in paths.items():
        if path.startswith("x-"):
            continue
        path_params = path_item.get("parameters", [])
        for verb in verbs:
            if verb not in path_item:
                continue
            operation = path_item[verb]
            method, refs = build_method(
                verb, path, operation, path_params, definitions, fallback_type, shared_parameters,
            )
            for tag in _operation_tags(operation, tag_policy, default_tag):
                methods.setdefault(tag, []).append(method)
                tag_refs = references.setdefault(tag, [])
                tag_refs.extend(r for r in refs if r not in tag_refs)

    resources = []
    for name, tag_methods in methods.items():
        logger.debug("Grouped resource %s (%d methods)", name, len(tag_methods))
        resources.append(ResourceDescriptor(
            name=name,
            methods=_unique_operation_ids(tag_methods),
            references=references[name],
        ))
    return resources
