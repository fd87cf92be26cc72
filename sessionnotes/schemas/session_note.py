"""
Session Note Schemas.

Pydantic shapes for the three stages of a note: the raw draft a user
typed, the normalized note the validator accepts, and the confirmed note
read back from the store.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class NoteDraft(BaseModel):
    """
    Unvalidated note input.

    Accepts snake_case names or their camelCase aliases (clientName,
    sessionDate, freeText, durationMinutes). Values are kept as typed so
    the validator can report the first failing rule itself.
    """

    client_name: Any = ""
    session_date: Any = Field(
        default=None,
        description="date, datetime or ISO 'YYYY-MM-DD' string",
        examples=["2024-03-01"],
    )
    free_text: Any = None
    duration_minutes: Any = Field(
        default=None,
        description="int, numeric string, '' or None",
        examples=[45],
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ValidatedNote(BaseModel):
    """A draft that passed every field rule, normalized for insertion."""

    client_name: str
    session_date: date
    free_text: str | None = None
    duration_minutes: int | None = None

    model_config = ConfigDict(frozen=True)


class Note(BaseModel):
    """A confirmed note: id and created_at were assigned by the store."""

    id: str = Field(description="Store-assigned unique identifier")
    client_name: str
    session_date: date
    free_text: str | None = None
    duration_minutes: int | None = None
    created_at: datetime = Field(description="Store-assigned creation timestamp")

    model_config = ConfigDict(from_attributes=True, frozen=True)
