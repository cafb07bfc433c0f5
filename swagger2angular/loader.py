"""Load a Swagger document from a local file or a URL.

JSON and YAML are both accepted. JSON is tried first: PyYAML rejects some
valid JSON (tab indentation, for one), so YAML is only the fallback.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from .exceptions import SpecLoadError

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30.0


def _parse(text: str, source: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise SpecLoadError(f"Cannot parse {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise SpecLoadError(f"{source} does not contain a Swagger document")
    return data


def _fetch(url: str) -> str:
    logger.debug("Fetching %s", url)
    try:
        resp = httpx.get(url, timeout=FETCH_TIMEOUT, follow_redirects=True)
        resp.raise_for_status()
    except httpx.HTTPError as exc:
        raise SpecLoadError(f"Cannot fetch {url}: {exc}") from exc
    return resp.text


def load_spec(source: str | Path) -> dict[str, Any]:
    """Load the Swagger document at ``source`` (path or http(s) URL)."""
    source = str(source)
    if source.startswith(("http://", "https://")):
        text = _fetch(source)
    else:
        try:
            text = Path(source).read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecLoadError(f"Cannot read {source}: {exc}") from exc
    return _parse(text, source)


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_definitions(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract schema definitions from the spec."""
    return spec.get("definitions") or {}


def get_parameters(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract shared parameter definitions from the spec."""
    return spec.get("parameters") or {}


def get_base_path(spec: dict[str, Any]) -> str:
    return (spec.get("basePath") or "").rstrip("/")
