"""Compile logic-light templates into render functions.

Templates are Jinja2 source text; the compiled function takes a mapping
of context data and returns the rendered string. Nothing here knows
about models or resources.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Mapping

import jinja2

from . import naming
from .exceptions import TemplateNotFoundError, TemplateSyntaxError

TEMPLATE_DIR = Path(__file__).parent / "templates"

MODEL_TEMPLATE = "model.ts.j2"
RESOURCE_TEMPLATE = "resource.ts.j2"
BARREL_TEMPLATE = "barrel.ts.j2"

RenderFunction = Callable[[Mapping[str, Any]], str]


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )
    env.filters.update(
        camel=naming.to_camel,
        pascal=naming.to_pascal,
        kebab=naming.to_kebab,
        property_key=naming.property_key,
        type_name=naming.type_name,
    )
    return env


_ENV = _environment()


def compile_template(source: str, name: str | None = None) -> RenderFunction:
    """Compile template source into a render function.

    Args:
        source: Jinja2 template text.
        name: Optional template name, used in error messages.

    Raises:
        TemplateSyntaxError: If the template cannot be compiled.
    """
    try:
        template = _ENV.from_string(source)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateSyntaxError(exc.message or str(exc), exc.lineno, name) from exc

    def render(context: Mapping[str, Any]) -> str:
        return template.render(**context)

    return render


def load_template_source(path: Path) -> str:
    """Read a template file."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateNotFoundError(f"Cannot read template {path}: {exc}") from exc


def builtin_template_path(name: str) -> Path:
    return TEMPLATE_DIR / name
