"""
Structured logging for the API.

Every record is written as a single JSON object per line so that container
log collectors can index the fields. Extra context passed through
``logger.info("...", extra={...})`` is merged into the JSON object.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER_NAME = "driving_school"

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """
    Format log records as JSON lines.

    Output keys: ``level``, ``timestamp``, ``logger``, ``message``, any extra
    fields, and ``error`` when exception info is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["error"] = str(record.exc_info[1])
            payload["traceback"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "driving_school")
        level: Logging level, as an int or a name such as "DEBUG"

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger(level="DEBUG")
        >>> logger.info("Server started", extra={"port": 4000})
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a child of the application logger."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
