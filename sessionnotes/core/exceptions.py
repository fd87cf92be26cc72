"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.

Exceptions are raised inside the validator and the gateway only. Both
convert them to NoteError values (see sessionnotes.schemas.base) before
returning, so callers of the repository never see a raised error.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Every failure a note operation can report."""

    MISSING_CLIENT_NAME = "MissingClientName"
    MISSING_SESSION_DATE = "MissingSessionDate"
    NOTES_TOO_LONG = "NotesTooLong"
    INVALID_DURATION = "InvalidDuration"
    TRANSPORT_ERROR = "TransportError"
    STORE_ERROR = "StoreError"
    NOT_FOUND_OR_ALREADY_DELETED = "NotFoundOrAlreadyDeleted"
    SUBMISSION_IN_PROGRESS = "SubmissionInProgress"


VALIDATION_KINDS = frozenset({
    ErrorKind.MISSING_CLIENT_NAME,
    ErrorKind.MISSING_SESSION_DATE,
    ErrorKind.NOTES_TOO_LONG,
    ErrorKind.INVALID_DURATION,
})


class ApplicationError(Exception):
    """Base exception for all application errors."""

    kind: ErrorKind = ErrorKind.STORE_ERROR

    def __init__(
        self,
        message: str,
        code: str = "SYS_INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ApplicationError):
    """Raised when a draft note fails a field rule."""

    def __init__(
        self,
        message: str = "Validation failed",
        code: str = "VAL_VALIDATION_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class MissingClientNameError(ValidationError):
    kind = ErrorKind.MISSING_CLIENT_NAME

    def __init__(self, message: str = "Client name is required.") -> None:
        super().__init__(message, code="VAL_MISSING_CLIENT_NAME")


class MissingSessionDateError(ValidationError):
    kind = ErrorKind.MISSING_SESSION_DATE

    def __init__(self, message: str = "Session date is required.") -> None:
        super().__init__(message, code="VAL_MISSING_SESSION_DATE")


class NotesTooLongError(ValidationError):
    kind = ErrorKind.NOTES_TOO_LONG

    def __init__(
        self,
        max_length: int,
        actual_length: int | None,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message or f"Quick notes must be {max_length} characters or less.",
            code="VAL_NOTES_TOO_LONG",
            details={"max_length": max_length, "length": actual_length},
        )


class InvalidDurationError(ValidationError):
    kind = ErrorKind.INVALID_DURATION

    def __init__(self, value: Any) -> None:
        super().__init__(
            "Duration must be a non-negative whole number of minutes.",
            code="VAL_INVALID_DURATION",
            details={"value": repr(value)},
        )


class TransportError(ApplicationError):
    """Raised when the remote store cannot be reached."""

    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str = "Remote store unreachable") -> None:
        super().__init__(message, code="SYS_TRANSPORT_ERROR")


class StoreError(ApplicationError):
    """Raised when the remote store rejects an operation."""

    kind = ErrorKind.STORE_ERROR

    def __init__(self, message: str = "Remote store error", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="SYS_STORE_ERROR", details=details)


class NotFoundOrAlreadyDeletedError(ApplicationError):
    """Raised when a delete affects zero rows."""

    kind = ErrorKind.NOT_FOUND_OR_ALREADY_DELETED

    def __init__(self, note_id: str) -> None:
        super().__init__(
            "Note not found or already deleted",
            code="RES_NOT_FOUND",
            details={"note_id": note_id},
        )


class SubmissionInProgressError(ApplicationError):
    """Raised when a form is submitted while a previous save is in flight."""

    kind = ErrorKind.SUBMISSION_IN_PROGRESS

    def __init__(self, message: str = "A save is already in progress.") -> None:
        super().__init__(message, code="RES_CONFLICT")
