"""Document sources: turn YAML resources into parsed mappings."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Any, Protocol, Union

import yaml
from loguru import logger

from yamlmap.core.errors import ResourceNotFoundError, ResourceReadError, YamlMapConfigurationError


class ResolutionMethod(enum.Enum):
    """How missing resources are treated."""

    OVERRIDE = "override"
    OVERRIDE_AND_IGNORE = "override_and_ignore"
    FIRST_FOUND = "first_found"

    @classmethod
    def parse(cls, value: str | ResolutionMethod) -> ResolutionMethod:
        """Accept an enum member or its name/value in any case."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if member.value == key:
                return member
        raise YamlMapConfigurationError(
            f"Unknown resolution method: {value!r}",
            code="invalid_resolution_method",
            details={"value": value, "choices": [m.value for m in cls]},
        )


@dataclass(frozen=True)
class YamlText:
    """Inline YAML content, as opposed to a path string."""

    text: str
    name: str = "<string>"


Resource = Union[str, Path, YamlText, IO[str]]


class DocumentSource(Protocol):
    """Anything that yields parsed documents in order."""

    def documents(self) -> Iterator[Mapping[str, Any]]: ...


def _describe(resource: Resource) -> str:
    if isinstance(resource, YamlText):
        return resource.name
    if isinstance(resource, (str, Path)):
        return str(resource)
    return getattr(resource, "name", "<stream>")


def _as_documents(loaded: Iterable[Any], name: str) -> Iterator[dict[str, Any]]:
    for index, data in enumerate(loaded):
        if data is None:
            logger.debug("Skipping empty document {} in {}", index, name)
            continue
        if not isinstance(data, dict):
            logger.warning("Document {} in {} has invalid structure (expected dict)", index, name)
            continue
        yield data


class YamlDocumentSource:
    """Reads YAML resources in order; each may hold several documents."""

    def __init__(
        self,
        resources: Iterable[Resource],
        *,
        resolution_method: str | ResolutionMethod = ResolutionMethod.OVERRIDE,
    ) -> None:
        self._resources = list(resources)
        self._resolution_method = ResolutionMethod.parse(resolution_method)

    @property
    def resources(self) -> list[Resource]:
        return list(self._resources)

    @property
    def resolution_method(self) -> ResolutionMethod:
        return self._resolution_method

    def _missing(self, path: Path) -> None:
        if self._resolution_method is ResolutionMethod.OVERRIDE:
            raise ResourceNotFoundError(
                f"YAML resource not found: {path}",
                code="resource_not_found",
                details={"path": str(path)},
            )
        if self._resolution_method is ResolutionMethod.OVERRIDE_AND_IGNORE:
            logger.warning("YAML resource not found, ignoring: {}", path)
        else:
            logger.debug("YAML resource not found, trying next: {}", path)

    def _load(self, resource: Resource) -> list[dict[str, Any]] | None:
        """Parse one resource. None when it does not exist."""
        name = _describe(resource)
        try:
            if isinstance(resource, YamlText):
                loaded = list(yaml.safe_load_all(resource.text))
            elif isinstance(resource, (str, Path)):
                path = Path(resource)
                if not path.is_file():
                    self._missing(path)
                    return None
                try:
                    with open(path, encoding="utf-8") as f:
                        loaded = list(yaml.safe_load_all(f))
                except OSError as exc:
                    logger.error("Failed to read YAML {}: {}", path, exc)
                    raise ResourceReadError(
                        f"YAML resource could not be read: {path}",
                        code="resource_unreadable",
                        details={"path": str(path)},
                        original_error=exc,
                    ) from exc
            else:
                loaded = list(yaml.safe_load_all(resource))
        except yaml.YAMLError as exc:
            logger.error("Failed to parse YAML {}: {}", name, exc)
            raise
        logger.debug("Loaded {} document(s) from {}", len(loaded), name)
        return list(_as_documents(loaded, name))

    def documents(self) -> Iterator[dict[str, Any]]:
        for resource in self._resources:
            docs = self._load(resource)
            if docs is None:
                continue
            yield from docs
            # A found resource with no usable documents does not end the search
            if docs and self._resolution_method is ResolutionMethod.FIRST_FOUND:
                return


class MappingSource:
    """Yields already-parsed mappings."""

    def __init__(self, *documents: Mapping[str, Any]) -> None:
        self._documents = documents

    def documents(self) -> Iterator[Mapping[str, Any]]:
        return iter(self._documents)
