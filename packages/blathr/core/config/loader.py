"""Configuration loading for JSON and YAML documents.

Lexicon files go through the same parsing path, so one set of error
messages covers both.
"""

from __future__ import annotations

from collections.abc import Callable
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from blathr.core.config.models import AppConfig, GeneratorConfig
from blathr.core.utils.logging import configure_logging

logger = logging.getLogger(__name__)

_SUFFIX_FORMATS = {".json": "json", ".yaml": "yaml", ".yml": "yaml"}

_PARSERS: dict[str, Callable[[str], Any]] = {
    "json": json.loads,
    "yaml": yaml.safe_load,
}


def detect_format(file_path: Path | str) -> str:
    """Map a file extension to ``"json"`` or ``"yaml"``.

    Raises:
        ValueError: For any other extension.

    Example:
        >>> detect_format("blathr.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    try:
        return _SUFFIX_FORMATS[suffix]
    except KeyError:
        raise ValueError(f"Unsupported config format: {suffix or '<none>'}") from None


def parse_document(text: str, fmt: str, source: str = "<string>") -> dict[str, Any]:
    """Parse JSON or YAML text whose root must be a mapping.

    An empty document parses to an empty mapping.

    Args:
        text: Document text.
        fmt: ``"json"`` or ``"yaml"``.
        source: Name used in error messages (usually the file path).

    Raises:
        ValueError: If the format is unknown, the text does not parse, or
            the root is not a mapping.
    """
    parser = _PARSERS.get(fmt)
    if parser is None:
        raise ValueError(f"Unsupported config format: {fmt}")

    try:
        content = parser(text)
    except (ValueError, yaml.YAMLError) as e:
        raise ValueError(f"Invalid {fmt.upper()} in {source}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {source}, got {type(content).__name__}")
    return content


def load_config(path: str | Path) -> dict[str, Any]:
    """Read a .json, .yaml or .yml file into a raw mapping.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: See parse_document.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Config file does not exist: {path}")
    logger.debug("Reading %s", path)
    return parse_document(path.read_text(encoding="utf-8"), detect_format(path), str(path))


def load_generator_config(path: str | Path | None = None, **overrides: Any) -> GeneratorConfig:
    """Load a GeneratorConfig from a file, applying keyword overrides on top.

    Args:
        path: Path to a JSON/YAML file holding generator settings, or None
        **overrides: Field values that win over the file

    Returns:
        Validated GeneratorConfig

    Example:
        >>> config = load_generator_config(None, strict_mode=True)
        >>> config.strict_mode
        True
    """
    raw: dict[str, Any] = load_config(path) if path is not None else {}
    raw.update(overrides)
    return GeneratorConfig.model_validate(raw)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    Args:
        path: Path to app config file; defaults to AppConfig.default_path()

    Returns:
        Validated AppConfig with defaults for missing values
    """
    return AppConfig.load_or_default(path)


def configure_logging_from(config: AppConfig) -> None:
    """Configure Python logging from an app config."""
    configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
