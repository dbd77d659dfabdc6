"""Structured logging for the OTL engine.

Engine modules attach context to records through ``extra`` keys prefixed
with ``otl_`` (day id, cycle phase, tournament mode, minutes, reductions).
Both formatters carry those keys: the JSON formatter as top-level fields,
the text formatter as trailing ``key=value`` pairs.

Format and level come from ``Config`` (OTL_LOG_FORMAT, OTL_LOG_LEVEL).
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import IO, TYPE_CHECKING, Any

if TYPE_CHECKING:
    from otl_engine.config import Config

EXTRA_PREFIX = "otl_"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def otl_extras(record: logging.LogRecord) -> dict[str, Any]:
    """The ``otl_*`` attributes of a record, in the order they were set."""
    return {key: value for key, value in record.__dict__.items() if key.startswith(EXTRA_PREFIX)}


class JSONFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
        }

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = "".join(traceback.format_exception(*record.exc_info))

        log_entry.update(otl_extras(record))
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Plain text lines with ``otl_*`` context appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = otl_extras(record)
        if not extras:
            return line
        context = " ".join(f"{key}={_text_value(value)}" for key, value in extras.items())
        # Keep any traceback below the context
        head, sep, tail = line.partition("\n")
        return f"{head} [{context}]{sep}{tail}"


def _text_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)


def setup_logging(
    log_format: str,
    level: int = logging.WARNING,
    stream: IO[str] | None = None,
) -> logging.Handler:
    """Replace the root logger's handlers with one JSON or text handler.

    Logs go to stderr unless ``stream`` is given; stdout stays free for
    command output. Returns the installed handler.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter() if log_format == "json" else TextFormatter())

    root.addHandler(handler)
    return handler


def configure_logging(config: Config, stream: IO[str] | None = None) -> logging.Handler:
    """Apply the log format and level of a loaded ``Config``."""
    return setup_logging(config.log_format, config.level, stream)
