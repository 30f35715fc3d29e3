"""Settings, merged-config accessor and loaders."""

from yamlmap.config.loader import build_factory, load_config, load_settings_with_env
from yamlmap.config.schema import Config, Settings

__all__ = ["Config", "Settings", "build_factory", "load_config", "load_settings_with_env"]
