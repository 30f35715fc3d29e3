"""yamlmap domain exceptions."""

from __future__ import annotations


class YamlMapError(Exception):
    """Base for yamlmap domain errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        details: dict[str, object] | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}
        self.original_error = original_error


class ResourceNotFoundError(YamlMapError):
    """Required YAML resource does not exist."""


class YamlMapConfigurationError(YamlMapError):
    """Invalid tool settings (env or CLI)."""


class ResourceReadError(YamlMapError):
    """YAML resource exists but could not be read."""
