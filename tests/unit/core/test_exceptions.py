"""
Unit Tests for Error Kinds and the Outcome Envelope.
"""

import pytest

from sessionnotes.core.exceptions import (
    ApplicationError,
    ErrorKind,
    InvalidDurationError,
    MissingClientNameError,
    MissingSessionDateError,
    NotesTooLongError,
    NotFoundOrAlreadyDeletedError,
    StoreError,
    SubmissionInProgressError,
    TransportError,
    ValidationError,
)
from sessionnotes.schemas.base import NoteError, Outcome


class TestErrorKinds:

    @pytest.mark.parametrize(
        "exc, kind, code",
        [
            (MissingClientNameError(), ErrorKind.MISSING_CLIENT_NAME, "VAL_MISSING_CLIENT_NAME"),
            (MissingSessionDateError(), ErrorKind.MISSING_SESSION_DATE, "VAL_MISSING_SESSION_DATE"),
            (NotesTooLongError(500, 501), ErrorKind.NOTES_TOO_LONG, "VAL_NOTES_TOO_LONG"),
            (InvalidDurationError(-1), ErrorKind.INVALID_DURATION, "VAL_INVALID_DURATION"),
            (TransportError(), ErrorKind.TRANSPORT_ERROR, "SYS_TRANSPORT_ERROR"),
            (StoreError(), ErrorKind.STORE_ERROR, "SYS_STORE_ERROR"),
            (NotFoundOrAlreadyDeletedError("x"), ErrorKind.NOT_FOUND_OR_ALREADY_DELETED, "RES_NOT_FOUND"),
            (SubmissionInProgressError(), ErrorKind.SUBMISSION_IN_PROGRESS, "RES_CONFLICT"),
        ],
    )
    def test_kind_and_code(self, exc, kind, code):
        assert isinstance(exc, ApplicationError)
        assert exc.kind is kind
        assert exc.code == code

    def test_validation_errors_share_base(self):
        assert issubclass(MissingClientNameError, ValidationError)
        assert not issubclass(StoreError, ValidationError)

    def test_kind_values_match_names(self):
        assert ErrorKind.NOTES_TOO_LONG.value == "NotesTooLong"
        assert ErrorKind("TransportError") is ErrorKind.TRANSPORT_ERROR


class TestNoteError:

    def test_from_exception(self):
        error = NoteError.from_exception(NotesTooLongError(500, 612))

        assert error.kind is ErrorKind.NOTES_TOO_LONG
        assert error.message == "Quick notes must be 500 characters or less."
        assert error.details == {"max_length": 500, "length": 612}
        assert error.is_validation

    def test_empty_details_become_none(self):
        assert NoteError.from_exception(TransportError("down")).details is None

    def test_store_errors_are_not_validation(self):
        assert not NoteError.from_exception(StoreError("boom")).is_validation


class TestOutcome:

    def test_success(self):
        outcome = Outcome[int].success(3)

        assert outcome.ok
        assert outcome.value == 3
        assert outcome.error is None

    def test_failure_from_exception(self):
        outcome = Outcome[int].failure(StoreError("boom"))

        assert not outcome.ok
        assert outcome.value is None
        assert outcome.error.kind is ErrorKind.STORE_ERROR
        assert outcome.error.message == "boom"

    def test_failure_from_error_value(self):
        error = NoteError.from_exception(TransportError())

        assert Outcome.failure(error).error == error
