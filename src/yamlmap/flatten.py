"""Flattened (dotted path) view of a document."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _join(path: str, key: str) -> str:
    if not path:
        return key
    if key.startswith("["):
        return path + key
    return f"{path}.{key}"


def _flatten_into(result: dict[str, Any], source: Mapping[Any, Any], path: str) -> None:
    for key, value in source.items():
        full = _join(path, str(key))
        if isinstance(value, Mapping):
            if value:
                _flatten_into(result, value, full)
            else:
                result[full] = ""
        elif isinstance(value, list):
            if not value:
                result[full] = ""
                continue
            for i, item in enumerate(value):
                _flatten_into(result, {f"[{i}]": item}, full)
        else:
            result[full] = value


def flatten(document: Mapping[Any, Any]) -> dict[str, Any]:
    """Return ``document`` as a single-level dict keyed by property path.

    ``{"foo": {"bar": [1, 2]}}`` becomes ``{"foo.bar[0]": 1, "foo.bar[1]": 2}``.
    Empty mappings and lists map to ``""``.
    """
    result: dict[str, Any] = {}
    _flatten_into(result, document, "")
    return result
