"""Descriptor types produced by the resolver and grouper.

Templates never see these classes directly; the generator hands them
over as plain dicts via ``model_dump()``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TypeInfo(_Frozen):
    """Resolved type of a single schema node."""

    type: str
    is_array: bool = False
    is_reference: bool = False
    reference: str | None = None  # referenced model name, also for arrays of refs

    @property
    def annotation(self) -> str:
        """Full TypeScript type, e.g. ``Pet[]``."""
        return f"{self.type}[]" if self.is_array else self.type


class PropertyDescriptor(_Frozen):
    name: str
    type: str
    required: bool = False
    is_array: bool = False
    is_reference: bool = False
    description: str = ""


class ModelDescriptor(_Frozen):
    """One schema definition, ready to render."""

    name: str
    properties: list[PropertyDescriptor] = []
    description: str = ""
    references: list[str] = []  # models referenced by properties, excluding self
    extends: list[str] = []  # allOf parents
    alias: str | None = None  # set for non-object definitions
    enum: list[Any] | None = None


class ParameterDescriptor(_Frozen):
    name: str
    location: str  # path / query / header / formData / body
    type: str
    required: bool = False
    identifier: str  # TypeScript-safe argument name


class MethodDescriptor(_Frozen):
    http_method: str
    path_template: str
    operation_id: str
    parameters: list[ParameterDescriptor] = []
    request_body_type: str | None = None
    response_type: str | None = None
    url_template: str = ""  # path_template with ${identifier} placeholders
    summary: str = ""


class ResourceDescriptor(_Frozen):
    """All operations sharing one tag."""

    name: str
    methods: list[MethodDescriptor] = []
    references: list[str] = []


class RenderedFile(_Frozen):
    relative_path: str
    content: str


class GenerationResult(_Frozen):
    """Rendered records of both pipelines; each list ends with its barrel."""

    models: list[RenderedFile]
    resources: list[RenderedFile]
