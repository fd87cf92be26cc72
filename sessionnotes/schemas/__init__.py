# Pydantic schemas package
from sessionnotes.schemas.base import NoteError, Outcome
from sessionnotes.schemas.session_note import Note, NoteDraft, ValidatedNote

__all__ = [
    "Note",
    "NoteDraft",
    "NoteError",
    "Outcome",
    "ValidatedNote",
]
