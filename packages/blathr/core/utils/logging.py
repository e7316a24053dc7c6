"""Logging setup for Blathr.

Text output by default, JSON lines with ``structured=True``. Generation
fields (seed, archetype, sentence type, attempt) passed via ``extra`` or a
LoggerAdapter are lifted to the top level of JSON records so a run can be
replayed from its log.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

DEFAULT_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"

GENERATION_FIELDS: tuple[str, ...] = ("seed", "archetype", "sentence_type", "attempt")

# Attributes every LogRecord carries; anything else came from ``extra``
_RESERVED = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {"message", "asctime"}


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Return the attributes added to a record through ``extra``."""
    return {k: v for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_")}


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record.

    Example line:
        {"ts": "...", "level": "DEBUG", "logger": "blathr.core.generator",
         "message": "...", "seed": 42, "attempt": 3, "extra": {...}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }

        extras = record_extras(record)
        for field in GENERATION_FIELDS:
            if field in extras:
                entry[field] = extras.pop(field)
        if extras:
            entry["extra"] = extras

        if record.exc_info and record.exc_info[0] is not None:
            entry["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": record.exc_text or self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Route logging to stderr or a file, replacing any earlier setup.

    Args:
        level: Level name, case-insensitive.
        format_string: Text format; ignored when ``structured`` is set.
        filename: Log file path; stderr when omitted.
        structured: Emit JSON lines via StructuredJSONFormatter.

    Example:
        >>> configure_logging(level="DEBUG", structured=True, filename="blathr.jsonl")
    """
    handler: logging.Handler = logging.FileHandler(filename) if filename else logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredJSONFormatter() if structured else logging.Formatter(format_string or DEFAULT_FORMAT))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Return the named logger, bound to ``context`` when any is given.

    Example:
        >>> get_logger(__name__, seed=42, archetype="corporate").debug("ready")
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, context) if context else logger
