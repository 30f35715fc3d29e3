"""Load YAML documents and merge them into one ordered map."""

from yamlmap.factory import YamlMapFactory, load_yaml_map
from yamlmap.flatten import flatten
from yamlmap.merge import merge, merge_all
from yamlmap.source import DocumentSource, MappingSource, ResolutionMethod, YamlDocumentSource, YamlText

__version__ = "0.1.0"

__all__ = [
    "DocumentSource",
    "MappingSource",
    "ResolutionMethod",
    "YamlDocumentSource",
    "YamlMapFactory",
    "YamlText",
    "__version__",
    "flatten",
    "load_yaml_map",
    "merge",
    "merge_all",
]
