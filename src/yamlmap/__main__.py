"""yamlmap entrypoint. Merges YAML files and prints the result."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from yamlmap import __version__
from yamlmap.config import build_factory, load_settings_with_env
from yamlmap.core.errors import YamlMapError
from yamlmap.flatten import flatten
from yamlmap.source import ResolutionMethod


def _intercept_logging(level: str) -> None:
    """Route stdlib logging records to loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            try:
                log_level: str | int = logger.level(record.levelname).name
            except ValueError:
                log_level = record.levelno
            logger.patch(
                lambda r: r.update(
                    name=record.name,
                    function=record.funcName,
                    line=record.lineno,
                ),
            ).opt(exception=record.exc_info).log(log_level, record.getMessage())

    logging.basicConfig(handlers=[InterceptHandler()], level=level, force=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru on stderr.
    Level: verbose=True or LOG_LEVEL=DEBUG enables DEBUG; otherwise INFO."""
    level = "INFO"
    if verbose:
        level = "DEBUG"
    else:
        env_level = (os.environ.get("LOG_LEVEL") or "").upper()
        if env_level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            level = env_level

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=("<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}"),
    )
    _intercept_logging(level)


_JSON_KEY_TYPES = (str, int, float, bool, type(None))


def _json_keys(value: Any) -> Any:
    """Stringify keys json cannot encode (dates, tuples) at any depth."""
    if isinstance(value, dict):
        return {(k if isinstance(k, _JSON_KEY_TYPES) else str(k)): _json_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_json_keys(v) for v in value]
    return value


def render(data: dict[str, Any], fmt: str) -> str:
    """Serialize merged output for stdout."""
    if fmt == "json":
        return json.dumps(_json_keys(data), indent=2, default=str)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yamlmap",
        description="Merge YAML documents; nested maps merge, everything else is replaced",
    )
    parser.add_argument("files", nargs="*", type=Path, help="YAML files, lowest precedence first")
    parser.add_argument(
        "--resolution-method",
        "-m",
        choices=[m.value for m in ResolutionMethod],
        default=None,
        help="How missing files are handled (default: override, or YAMLMAP_RESOLUTION_METHOD)",
    )
    parser.add_argument(
        "--flatten",
        action="store_true",
        help="Print dotted property paths instead of nested maps",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=("yaml", "json"),
        default="yaml",
        help="Output format (default: yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entrypoint."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    try:
        settings = load_settings_with_env(resolution_method=args.resolution_method)
        result = build_factory(args.files, settings).get_object()
    except (YamlMapError, yaml.YAMLError) as exc:
        logger.error("{}", exc)
        sys.exit(1)

    logger.info("Merged {} file(s): {} top-level keys", len(args.files), len(result))
    if args.flatten:
        result = flatten(result)
    sys.stdout.write(render(result, args.format))


if __name__ == "__main__":
    main()
