"""Exception hierarchy for swagger2angular.

All errors derive from :class:`GeneratorError`, which carries an
``exit_code`` used by the CLI when it aborts a run.

Subclass hierarchy::

    GeneratorError
    +-- UnsupportedTypeError
    +-- UnresolvedReferenceError
    +-- TemplateSyntaxError
    +-- TemplateNotFoundError
    +-- SpecLoadError
    +-- ConfigError
"""

from __future__ import annotations

EXIT_FAILURE = 1


class GeneratorError(Exception):
    """Base exception for all generator errors."""

    exit_code: int = EXIT_FAILURE


class UnsupportedTypeError(GeneratorError):
    """Raised when a primitive type/format pair has no TypeScript mapping."""

    def __init__(self, type_name: str | None, format: str | None = None):
        self.type_name = type_name
        self.format = format
        if format:
            message = f"Unsupported type {type_name!r} with format {format!r}"
        else:
            message = f"Unsupported type {type_name!r}"
        super().__init__(message)


class UnresolvedReferenceError(GeneratorError):
    """Raised when a ``$ref`` names a definition that does not exist.

    Args:
        name: The definition name (or raw reference) that could not be found.
        referrer: The model or operation holding the reference.
    """

    def __init__(self, name: str, referrer: str):
        self.name = name
        self.referrer = referrer
        super().__init__(f"Unresolved reference {name!r} in {referrer}")


class TemplateSyntaxError(GeneratorError):
    """Raised when a template fails to compile."""

    def __init__(self, construct: str, lineno: int | None = None, template: str | None = None):
        self.construct = construct
        self.lineno = lineno
        self.template = template
        where = template or "<template>"
        if lineno is not None:
            where = f"{where}, line {lineno}"
        super().__init__(f"Template syntax error in {where}: {construct}")


class TemplateNotFoundError(GeneratorError):
    """Raised when a configured template file cannot be read."""


class SpecLoadError(GeneratorError):
    """Raised when the Swagger document cannot be fetched or parsed."""


class ConfigError(GeneratorError):
    """Raised for an unreadable or invalid build configuration."""
