"""
Utilities Module

Provides shared utilities across the application:
- Logging configuration
- Custom exceptions
- Rate limiting
"""

from .logging import get_logger, setup_logging, log_storage_call
from .exceptions import (
    ErrorKind,
    ErrorSeverity,
    VerbLabError,
    StorageError,
    StorageTimeoutError,
    VerbNotFoundError,
    InvalidVerbDataError,
    PreferencesError,
    PronunciationError,
)
from .rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
    RATE_LIMITS,
    limit_search,
    limit_lookup,
    limit_preferences,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "log_storage_call",
    # Exceptions
    "ErrorKind",
    "ErrorSeverity",
    "VerbLabError",
    "StorageError",
    "StorageTimeoutError",
    "VerbNotFoundError",
    "InvalidVerbDataError",
    "PreferencesError",
    "PronunciationError",
    # Rate Limiting
    "limiter",
    "rate_limit_exceeded_handler",
    "RATE_LIMITS",
    "limit_search",
    "limit_lookup",
    "limit_preferences",
]
