"""Cached accessor for the merged YAML map."""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from loguru import logger

from yamlmap.merge import merge_all
from yamlmap.source import DocumentSource, ResolutionMethod, Resource, YamlDocumentSource

Builder = Callable[[Iterable[Mapping[str, Any]]], dict[str, Any]]


class YamlMapFactory:
    """Builds the merged map from a document source, optionally caching it.

    With ``singleton=True`` (default) the first successful build is kept and
    returned on every later call, even if the source would now produce
    something else. With ``singleton=False`` every call rebuilds.

    ``builder`` turns the document stream into the result; it defaults to
    :func:`yamlmap.merge.merge_all`. Wrap it for post-processing.

    Failures from the source propagate unchanged and nothing is cached.
    """

    object_type = dict

    def __init__(
        self,
        source: DocumentSource,
        *,
        singleton: bool = True,
        builder: Builder = merge_all,
    ) -> None:
        self._source = source
        self._singleton = singleton
        self._builder = builder
        self._instance: dict[str, Any] | None = None
        self._lock = threading.Lock()

    @property
    def is_singleton(self) -> bool:
        return self._singleton

    def _build(self) -> dict[str, Any]:
        result = self._builder(self._source.documents())
        logger.debug("Built merged map: {} top-level keys", len(result))
        return result

    def get_object(self) -> dict[str, Any]:
        """Return the merged map."""
        if not self._singleton:
            return self._build()
        with self._lock:
            if self._instance is None:
                self._instance = self._build()
            else:
                logger.debug("Returning cached merged map")
            return self._instance


def load_yaml_map(
    *resources: Resource,
    resolution_method: str | ResolutionMethod = ResolutionMethod.OVERRIDE,
) -> dict[str, Any]:
    """Load and merge YAML resources in one call."""
    source = YamlDocumentSource(resources, resolution_method=resolution_method)
    return YamlMapFactory(source).get_object()
