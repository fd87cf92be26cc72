"""
Base Schemas.

Result envelope returned by the validator, the gateway and the repository.
Failures are values, never raised across these boundaries.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from sessionnotes.core.exceptions import VALIDATION_KINDS, ApplicationError, ErrorKind

DataT = TypeVar("DataT")


class NoteError(BaseModel):
    """Error detail structure."""

    kind: ErrorKind
    code: str
    message: str
    details: dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_exception(cls, exc: ApplicationError) -> "NoteError":
        return cls(
            kind=exc.kind,
            code=exc.code,
            message=exc.message,
            details=exc.details or None,
        )

    @property
    def is_validation(self) -> bool:
        """True for the field-rule kinds that never reach the store."""
        return self.kind in VALIDATION_KINDS


class Outcome(BaseModel, Generic[DataT]):
    """
    Value-or-error envelope.

    Exactly one of value/error is meaningful: ok is True when error is None.

        outcome = await gateway.list()
        if outcome.ok:
            render(outcome.value)
    """

    value: DataT | None = None
    error: NoteError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Outcome[Any]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: NoteError | ApplicationError) -> "Outcome[Any]":
        if isinstance(error, ApplicationError):
            error = NoteError.from_exception(error)
        return cls(error=error)
