"""Logging setup for key discovery: JSON or plain records on stderr."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

# Driver loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("psycopg2", "sqlglot", "teradatasql")


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with any resolver context merged in."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        data.update(getattr(record, "extra_fields", {}))
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable records."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def setup_logging(
    level: str = "INFO",
    structured: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Configure the root logger.

    Records go to stderr, so command output on stdout stays parseable, and
    optionally to ``log_file`` as well.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        structured: Emit JSON records instead of plain text
        log_file: Optional path receiving the same records
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = StructuredFormatter() if structured else StandardFormatter()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """Attaches a fixed context (e.g. the table being resolved) to records."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        kwargs.setdefault("extra", {})["extra_fields"] = self.extra
        return msg, kwargs


def get_contextual_logger(name: str, context: Dict[str, Any]) -> ContextLoggerAdapter:
    """Get a logger whose records carry ``context``.

    Example:
        >>> logger = get_contextual_logger(__name__, {"table": "SALES.ORDERS"})
        >>> logger.info("Resolved key")
    """
    return ContextLoggerAdapter(logging.getLogger(name), context)
