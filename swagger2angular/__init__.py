"""Generate a typed Angular client from a Swagger 2.0 specification."""

from __future__ import annotations

from .codegen import Generator, export_templates, write_output
from .config import GeneratorConfig
from .exceptions import (
    GeneratorError,
    TemplateSyntaxError,
    UnresolvedReferenceError,
    UnsupportedTypeError,
)

__all__ = [
    "Generator",
    "GeneratorConfig",
    "GeneratorError",
    "TemplateSyntaxError",
    "UnresolvedReferenceError",
    "UnsupportedTypeError",
    "export_templates",
    "write_output",
]
