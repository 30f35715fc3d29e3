"""Build a factory from settings and load configs."""

from __future__ import annotations

from collections.abc import Iterable

from yamlmap.config.schema import Config, Settings
from yamlmap.factory import YamlMapFactory
from yamlmap.source import ResolutionMethod, Resource, YamlDocumentSource


def load_settings_with_env(
    *,
    singleton: bool | None = None,
    resolution_method: str | ResolutionMethod | None = None,
) -> Settings:
    """Load .env (when present) and read settings from the environment."""
    from dotenv import load_dotenv

    load_dotenv()
    return Settings(singleton=singleton, resolution_method=resolution_method)


def build_factory(resources: Iterable[Resource], settings: Settings | None = None) -> YamlMapFactory:
    settings = settings or Settings()
    source = YamlDocumentSource(resources, resolution_method=settings.resolution_method)
    return YamlMapFactory(source, singleton=settings.singleton)


def load_config(*resources: Resource, settings: Settings | None = None) -> Config:
    """Merge ``resources`` and wrap the result in a Config accessor."""
    return Config(build_factory(resources, settings).get_object())
