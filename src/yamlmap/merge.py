"""Recursive map-merge of parsed YAML documents.

Later documents override earlier ones key-by-key. When both sides hold a
mapping at the same key the two are merged; any other value (scalar, list,
``None``, or a mapping meeting a non-mapping) replaces the existing one.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


def merge(output: dict[str, Any], incoming: Mapping[str, Any]) -> None:
    """Merge ``incoming`` into ``output`` in place.

    Nested mappings in ``output`` are never mutated: they are copied before
    the recursive merge and the copy takes their place. Values taken from
    ``incoming`` are stored as-is.
    """
    for key, value in incoming.items():
        existing = output.get(key)
        if isinstance(value, Mapping) and isinstance(existing, Mapping):
            result = dict(existing)
            merge(result, value)
            output[key] = result
        else:
            output[key] = value


def merge_all(documents: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Fold documents left to right into a new dict."""
    result: dict[str, Any] = {}
    for document in documents:
        merge(result, document)
    return result
