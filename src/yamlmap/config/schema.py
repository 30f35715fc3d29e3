"""Settings and merged-config accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from yamlmap.core.errors import YamlMapConfigurationError
from yamlmap.flatten import flatten
from yamlmap.source import ResolutionMethod

# Env keys that override settings (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "YAMLMAP_SINGLETON",
    "YAMLMAP_RESOLUTION_METHOD",
)


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


def _parse_bool_env(val: str) -> bool | None:
    """Parse env string to bool; None if not a recognized bool."""
    v = val.lower()
    if v in ("1", "true", "yes"):
        return True
    if v in ("0", "false", "no"):
        return False
    return None


class Settings:
    """Factory settings: explicit values, then env overrides, then defaults."""

    def __init__(
        self,
        *,
        singleton: bool | None = None,
        resolution_method: str | ResolutionMethod | None = None,
    ) -> None:
        self._singleton = singleton
        self._resolution_method = resolution_method
        self._env: dict[str, str] = _load_env_overrides()
        self._validate()

    def reload(self) -> None:
        """Re-read env overrides."""
        self._env = _load_env_overrides()
        self._validate()

    def _validate(self) -> None:
        env_val = self._env.get("YAMLMAP_SINGLETON", "")
        if env_val and _parse_bool_env(env_val) is None:
            raise YamlMapConfigurationError(
                f"YAMLMAP_SINGLETON must be a boolean, got {env_val!r}",
                code="invalid_singleton",
                details={"value": env_val},
            )
        # Raises on unknown names
        _ = self.resolution_method

    @property
    def singleton(self) -> bool:
        if self._singleton is not None:
            return self._singleton
        parsed = _parse_bool_env(self._env.get("YAMLMAP_SINGLETON", ""))
        if parsed is not None:
            return parsed
        return True

    @property
    def resolution_method(self) -> ResolutionMethod:
        if self._resolution_method is not None:
            return ResolutionMethod.parse(self._resolution_method)
        env_val = self._env.get("YAMLMAP_RESOLUTION_METHOD", "")
        if env_val:
            return ResolutionMethod.parse(env_val)
        return ResolutionMethod.OVERRIDE


class Config:
    """Accessor over a merged map with dot-path lookup."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    def reload(self, data: dict[str, Any]) -> None:
        """Replace config data."""
        self._data = data or {}
        logger.debug("Config reloaded: {} top-level keys", len(self._data))

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    @property
    def flattened(self) -> dict[str, Any]:
        """Property-path view, e.g. ``{'foo.bar.one': 2}``."""
        return flatten(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data
