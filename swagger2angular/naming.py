"""Identifier and file name helpers for generated TypeScript.

Derived operation ids follow {verb}{Resource}:
  - GET collection      -> list{Plural}
  - GET collection/{id} -> get{Singular}
  - POST collection     -> create{Singular}
  - PUT collection/{id} -> update{Singular}
  - DELETE col/{id}     -> delete{Singular}

Examples:
  GET    /pets                 -> listPets
  GET    /pets/{petId}         -> getPet
  POST   /pets                 -> createPet
  DELETE /pets/{petId}         -> deletePet
  GET    /stores/{id}/orders   -> getStoresOrders
"""

from __future__ import annotations

import json
import re

_METHOD_VERBS: dict[str, str] = {
    "get": "list",
    "post": "create",
    "put": "update",
    "delete": "delete",
    "patch": "update",
}

_IRREGULAR_PLURALS: dict[str, str] = {
    "person": "people",
    "child": "children",
    "status": "statuses",
    "address": "addresses",
}

_IRREGULAR_SINGULARS: dict[str, str] = {v: k for k, v in _IRREGULAR_PLURALS.items()}

_RESERVED_WORDS = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with",
})

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _pluralize(word: str) -> str:
    """Return the plural form of a resource name."""
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith("y") and not word.endswith(("ay", "ey", "oy", "uy")):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "ch", "sh")):
        return word + "es"
    return word + "s"


def _singularize(word: str) -> str:
    """Return the singular form of a resource name."""
    if word in _IRREGULAR_SINGULARS:
        return _IRREGULAR_SINGULARS[word]
    if word in _IRREGULAR_PLURALS:
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"
    if word.endswith(("ses", "xes", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _camel_to_snake(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case."""
    s1 = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s1).lower()


def _words(name: str) -> list[str]:
    """Split any identifier-ish string into lowercase words."""
    snake = _camel_to_snake(name)
    return [w for w in re.split(r"[^a-z0-9]+", snake) if w]


def to_pascal(name: str) -> str:
    return "".join(w.capitalize() for w in _words(name))


def to_camel(name: str) -> str:
    pascal = to_pascal(name)
    return pascal[:1].lower() + pascal[1:]


def to_kebab(name: str) -> str:
    return "-".join(_words(name))


def to_identifier(name: str) -> str:
    """Return a TypeScript-safe argument/method name for ``name``."""
    ident = to_camel(name) or "param"
    if ident[0].isdigit():
        ident = f"_{ident}"
    if ident in _RESERVED_WORDS:
        ident = f"{ident}_"
    return ident


def type_name(name: str) -> str:
    """TypeScript type name for a definition name such as ``Foo.Bar``."""
    if _JS_IDENTIFIER.match(name) and name not in _RESERVED_WORDS:
        return name
    ident = to_pascal(name) or "Unnamed"
    if ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def property_key(name: str) -> str:
    """Quote an object key unless it is a plain identifier."""
    if _JS_IDENTIFIER.match(name):
        return name
    return json.dumps(name)


def _extract_path_parts(path: str) -> list[str]:
    """Extract meaningful path segments, stripping {params}."""
    return [p for p in path.split("/") if p and not p.startswith("{")]


def build_operation_id(method: str, path: str) -> str:
    """Build an operation id from HTTP method and path.

    Used when an operation declares no ``operationId``.
    """
    method_lower = method.lower()
    parts = [_words(p) for p in _extract_path_parts(path)]
    parts = [p for p in parts if p]
    has_id = any(p.startswith("{") for p in path.split("/") if p)

    if method_lower == "get":
        verb = "get" if has_id else "list"
    else:
        verb = _METHOD_VERBS.get(method_lower, method_lower)

    if not parts:
        return f"{verb}Root"

    # Single-segment paths: standard CRUD
    if len(parts) == 1:
        words = list(parts[0])
        if verb == "list":
            words[-1] = _pluralize(_singularize(words[-1]))
        elif has_id or verb == "create":
            words[-1] = _singularize(words[-1])
        return verb + "".join(w.capitalize() for w in words)

    # Multi-segment paths: join all segments
    return verb + "".join(w.capitalize() for part in parts for w in part)


def file_stem(name: str) -> str:
    """File name (without extension) for a model or resource name."""
    return to_kebab(name) or "unnamed"


def deduplicate(names: list[str], separator: str = "-") -> list[str]:
    """Make every name unique by appending a counter to repeats.

    The first occurrence keeps its name; later ones get ``-2``, ``-3``...
    """
    seen: set[str] = set()
    counts: dict[str, int] = {}
    result: list[str] = []
    for name in names:
        candidate = name
        while candidate in seen:
            counts[name] = counts.get(name, 1) + 1
            candidate = f"{name}{separator}{counts[name]}"
        seen.add(candidate)
        result.append(candidate)
    return result
