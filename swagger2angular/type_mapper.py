"""Map Swagger primitive type/format pairs to TypeScript type names."""

from __future__ import annotations

from .exceptions import UnsupportedTypeError

_STRING_FORMATS = (
    None, "byte", "password", "email", "uuid", "uri", "hostname",
    "ipv4", "ipv6", "date", "date-time",
)

# (type, format) -> TypeScript type
_TYPE_MAP: dict[tuple[str, str | None], str] = {
    **{("string", fmt): "string" for fmt in _STRING_FORMATS},
    ("string", "binary"): "Blob",
    ("integer", None): "number",
    ("integer", "int32"): "number",
    ("integer", "int64"): "number",
    ("number", None): "number",
    ("number", "float"): "number",
    ("number", "double"): "number",
    ("boolean", None): "boolean",
    ("file", None): "Blob",
    ("object", None): "any",
}


def map_type(type_name: str | None, format: str | None = None) -> str:
    """Return the TypeScript type for a primitive schema.

    Raises:
        UnsupportedTypeError: If the pair has no mapping.
    """
    try:
        return _TYPE_MAP[(type_name, format or None)]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(type_name, format) from None
