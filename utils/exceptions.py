"""
Custom Exceptions Module

Defines application-specific exceptions for clearer error handling.
All exceptions inherit from a base VerbLabError for easy catching.

Usage:
    from utils.exceptions import StorageError, VerbNotFoundError

    try:
        verbs = await repository.search(query)
    except StorageError as e:
        logger.error(f"Search failed: {e}")
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorSeverity(str, Enum):
    """How badly a failure affects the application."""
    LOW = "low"          # Minor, feature keeps working
    MEDIUM = "medium"    # Operation failed, user can retry
    HIGH = "high"        # Core functionality unavailable


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced to callers."""
    STORAGE = "storage"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    PREFERENCES = "preferences"
    PRONUNCIATION = "pronunciation"


class VerbLabError(Exception):
    """
    Base exception for all VerbLab application errors.

    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        severity: Severity tier used by the caller to decide on retry UI
        status_code: HTTP status code to return (optional)
    """

    kind: ErrorKind = ErrorKind.STORAGE

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.severity = severity
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_recoverable(self) -> bool:
        """Whether a retry affordance makes sense."""
        return self.severity != ErrorSeverity.HIGH

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "kind": self.kind.value,
            "severity": self.severity.value,
            "message": self.message,
            "details": self.details
        }


# =============================================================================
# Storage Exceptions
# =============================================================================

class StorageError(VerbLabError):
    """
    Raised when the verb store fails to answer a query.

    Common causes:
        - Database file missing or locked
        - SQL error
        - Schema upgrade failure
    """

    kind = ErrorKind.STORAGE

    def __init__(
        self,
        message: str = "Storage operation failed",
        operation: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"operation": operation, **(details or {})},
            severity=severity,
            status_code=500
        )


class StorageTimeoutError(StorageError):
    """Raised when a storage operation does not finish in time."""

    kind = ErrorKind.TIMEOUT

    def __init__(
        self,
        operation: str,
        timeout_seconds: float,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM
    ):
        super().__init__(
            message=f"Storage operation timed out: {operation}",
            operation=operation,
            severity=severity,
            details={"timeout_seconds": timeout_seconds}
        )
        self.status_code = 504


# =============================================================================
# Lookup / Data Exceptions
# =============================================================================

class VerbNotFoundError(VerbLabError):
    """
    Raised when an operation needs a verb that does not exist.

    Plain lookups return None instead; this is for callers such as
    pronunciation that cannot continue without the record.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, verb_id: str):
        super().__init__(
            message=f"Verb not found: {verb_id}",
            details={"verb_id": verb_id},
            severity=ErrorSeverity.LOW,
            status_code=404
        )


class InvalidVerbDataError(VerbLabError):
    """
    Raised when seed or input data cannot be turned into a verb record.

    Common causes:
        - Empty base form
        - Seed file is not a JSON list
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Invalid verb data",
        verb_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"verb_id": verb_id, **(details or {})},
            severity=ErrorSeverity.MEDIUM,
            status_code=422
        )


# =============================================================================
# Preferences / Pronunciation Exceptions
# =============================================================================

class PreferencesError(VerbLabError):
    """Raised when user preferences cannot be persisted."""

    kind = ErrorKind.PREFERENCES

    def __init__(
        self,
        message: str = "Failed to persist preferences",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            severity=ErrorSeverity.LOW,
            status_code=500
        )


class PronunciationError(VerbLabError):
    """
    Raised when pronunciation text cannot be prepared.

    Common causes:
        - Unknown verb form requested
        - Verb has no text for the requested form
    """

    kind = ErrorKind.PRONUNCIATION

    def __init__(
        self,
        message: str = "Failed to prepare pronunciation",
        verb_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"verb_id": verb_id, **(details or {})},
            severity=ErrorSeverity.LOW,
            status_code=400
        )
