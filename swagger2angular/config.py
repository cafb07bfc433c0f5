"""Generator configuration.

A :class:`GeneratorConfig` is built once (from CLI options, a JSON build
config file, or both) and passed explicitly into the generator.
Build config files use camelCase keys::

    {
        "swaggerSpecFile": "petstore.json",
        "output": "client",
        "debug": false,
        "templatePath": "templates",
        "modelTemplate": "model.ts.j2",
        "resourceTemplate": "resource.ts.j2"
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigError
from .path_grouper import DEFAULT_TAG, DEFAULT_VERB_ORDER, TAG_POLICIES
from .templating import MODEL_TEMPLATE, RESOURCE_TEMPLATE, builtin_template_path

DEFAULT_OUTPUT = "client"


class GeneratorConfig(BaseModel):
    """Immutable configuration for one generation run."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, extra="ignore", protected_namespaces=(),
    )

    source: str | None = Field(default=None, alias="swaggerSpecFile")
    output: str = DEFAULT_OUTPUT
    debug: bool = False
    template_path: str | None = Field(default=None, alias="templatePath")
    model_template: str | None = Field(default=None, alias="modelTemplate")
    resource_template: str | None = Field(default=None, alias="resourceTemplate")
    verb_order: tuple[str, ...] = Field(default=DEFAULT_VERB_ORDER, alias="verbOrder")
    tag_policy: str = Field(default="first", alias="tagPolicy")
    default_tag: str = Field(default=DEFAULT_TAG, alias="defaultTag")
    fallback_type: str | None = Field(default=None, alias="fallbackType")

    @field_validator("tag_policy")
    @classmethod
    def _check_tag_policy(cls, value: str) -> str:
        if value not in TAG_POLICIES:
            raise ValueError(f"tag_policy must be one of {', '.join(TAG_POLICIES)}")
        return value

    @field_validator("verb_order")
    @classmethod
    def _lower_verbs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(v.lower() for v in value)

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorConfig":
        """Load a JSON build config file."""
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read build config {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Build config {path} must be a JSON object")
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "GeneratorConfig":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc

    def merged(self, **overrides: Any) -> "GeneratorConfig":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        if not values:
            return self
        return self.from_mapping({**self.model_dump(), **values})

    def _template_file(self, name: str | None, default: str) -> Path:
        if name is None:
            if self.template_path is None:
                return builtin_template_path(default)
            return Path(self.template_path) / default
        if self.template_path is None:
            return Path(name)
        return Path(self.template_path) / name

    @property
    def model_template_file(self) -> Path:
        return self._template_file(self.model_template, MODEL_TEMPLATE)

    @property
    def resource_template_file(self) -> Path:
        return self._template_file(self.resource_template, RESOURCE_TEMPLATE)
