"""Re-export from core.errors."""

from yamlmap.core.errors import (
    ResourceNotFoundError,
    ResourceReadError,
    YamlMapConfigurationError,
    YamlMapError,
)

__all__ = ["ResourceNotFoundError", "ResourceReadError", "YamlMapConfigurationError", "YamlMapError"]
