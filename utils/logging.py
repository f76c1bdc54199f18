"""
Logging Configuration Module

Console logging for the verb service: coloured lines for development, one
JSON object per line when ``LOG_JSON`` is set.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Seeded verb store with 22 verbs")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from config.settings import settings

# Attributes set through ``extra=`` by log_storage_call
STORAGE_FIELDS = ("operation", "success", "duration_ms", "error")


# =============================================================================
# Formatters
# =============================================================================

class ColoredFormatter(logging.Formatter):
    """Colours the level name by severity."""

    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelno, "")
        record.levelname = f"{color}{record.levelname:8}{self.RESET}"
        return super().format(record)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record.

    Storage calls logged through ``log_storage_call`` carry their operation,
    outcome and timing under a ``storage`` key so they can be filtered
    without parsing the message.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        storage = {
            field: getattr(record, field)
            for field in STORAGE_FIELDS
            if getattr(record, field, None) is not None
        }
        if storage:
            log_data["storage"] = storage

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str, ensure_ascii=False)


# =============================================================================
# Logger Configuration
# =============================================================================

def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name. Defaults to ``settings.LOG_LEVEL``, or DEBUG
               when ``settings.DEBUG`` is on and no level is configured.
        json_format: Emit JSON lines. Defaults to ``settings.LOG_JSON``.
    """
    if level is None:
        level = settings.LOG_LEVEL or ("DEBUG" if settings.DEBUG else "INFO")
    if json_format is None:
        json_format = settings.LOG_JSON

    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = ColoredFormatter(
            fmt="%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # SQL echo is controlled by DATABASE_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# =============================================================================
# Storage Calls
# =============================================================================

def log_storage_call(
    operation: str,
    success: bool,
    duration_ms: Optional[float] = None,
    error: Optional[str] = None
) -> None:
    """
    Log one verb store operation.

    Successes go to DEBUG, failures to ERROR. The fields are also attached
    to the record for ``JSONFormatter``.

    Args:
        operation: Repository operation (e.g. "search.exact", "seed")
        success: Whether the operation succeeded
        duration_ms: Call duration in milliseconds
        error: Failure description
    """
    logger = get_logger("storage")

    status = "✅" if success else "❌"
    msg = f"{status} {operation}"

    if duration_ms is not None:
        msg += f" | {duration_ms:.0f}ms"

    extra = {
        "operation": operation,
        "success": success,
        "duration_ms": None if duration_ms is None else round(duration_ms, 2),
        "error": error,
    }

    if success:
        logger.debug(msg, extra=extra)
    else:
        logger.error(f"{msg} | Error: {error}", extra=extra)
