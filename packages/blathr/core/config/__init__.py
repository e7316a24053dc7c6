"""Configuration management for Blathr."""

from blathr.core.config.loader import (
    configure_logging_from,
    detect_format,
    load_app_config,
    load_config,
    load_generator_config,
    parse_document,
)
from blathr.core.config.models import (
    AppConfig,
    ConfigBase,
    GeneratorConfig,
    LoggingConfig,
    SentenceTypeWeights,
)

__all__ = [
    # Loaders
    "configure_logging_from",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_generator_config",
    "parse_document",
    # Models
    "AppConfig",
    "ConfigBase",
    "GeneratorConfig",
    "LoggingConfig",
    "SentenceTypeWeights",
]
