"""
Note Validator.

Pure field-rule checks run before a draft is sent to the store. Rules are
checked in a fixed order and the first failure wins:

    1. client name present (after trimming)
    2. session date present and a calendar date
    3. free text within the length limit (after trimming)
    4. duration, if given, a non-negative whole number that fits the
       integer duration column
"""

import math
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from sessionnotes.core.exceptions import (
    InvalidDurationError,
    MissingClientNameError,
    MissingSessionDateError,
    NotesTooLongError,
    ValidationError,
)
from sessionnotes.schemas.base import Outcome
from sessionnotes.schemas.session_note import NoteDraft, ValidatedNote

DEFAULT_MAX_FREE_TEXT_LENGTH = 500

# Upper bound of the integer duration column.
MAX_DURATION_MINUTES = 2_147_483_647


def _check_client_name(value: Any) -> str:
    if not isinstance(value, str):
        raise MissingClientNameError()
    name = value.strip()
    if not name:
        raise MissingClientNameError()
    return name


def _parse_session_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise MissingSessionDateError(f"Session date {value!r} is not a valid date.")
    raise MissingSessionDateError()


def _check_free_text(value: Any, max_length: int) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise NotesTooLongError(
            max_length, None, f"Quick notes must be text of {max_length} characters or less."
        )
    text = value.strip()
    if len(text) > max_length:
        raise NotesTooLongError(max_length, len(text))
    return text or None


def _parse_duration(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidDurationError(value)

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            number: int | float = int(raw)
        except ValueError:
            try:
                number = float(raw)
            except ValueError:
                raise InvalidDurationError(value)
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise InvalidDurationError(value)

    if isinstance(number, float):
        if not math.isfinite(number) or not number.is_integer():
            raise InvalidDurationError(value)
        number = int(number)

    if number < 0 or number > MAX_DURATION_MINUTES:
        raise InvalidDurationError(value)
    return number


def validate(
    draft: NoteDraft | Mapping[str, Any],
    max_free_text_length: int = DEFAULT_MAX_FREE_TEXT_LENGTH,
) -> Outcome[ValidatedNote]:
    """
    Check a draft against the note field rules.

    Args:
        draft: Draft model, or a mapping with draft fields (snake_case or
            camelCase keys)
        max_free_text_length: Upper bound for trimmed free text

    Returns:
        Outcome holding the normalized note, or the first rule failure
    """
    if not isinstance(draft, NoteDraft):
        draft = NoteDraft.model_validate(draft)

    try:
        validated = ValidatedNote(
            client_name=_check_client_name(draft.client_name),
            session_date=_parse_session_date(draft.session_date),
            free_text=_check_free_text(draft.free_text, max_free_text_length),
            duration_minutes=_parse_duration(draft.duration_minutes),
        )
    except ValidationError as e:
        return Outcome[ValidatedNote].failure(e)

    return Outcome[ValidatedNote].success(validated)
