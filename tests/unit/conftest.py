"""
Unit Test Fixtures.

Fixtures for unit tests - the gateway is replaced by an in-memory stub.
Unit tests never touch a database.
"""

from datetime import date, datetime
from itertools import count
from unittest.mock import AsyncMock

import pytest

from sessionnotes.core.exceptions import (
    NotFoundOrAlreadyDeletedError,
    StoreError,
    TransportError,
)
from sessionnotes.schemas.base import Outcome
from sessionnotes.schemas.session_note import Note, ValidatedNote


def make_note(
    session_date: date | str,
    note_id: str | None = None,
    client_name: str = "Jane Doe",
    **overrides,
) -> Note:
    """Build a confirmed note for seeding stubs."""
    if isinstance(session_date, str):
        session_date = date.fromisoformat(session_date)
    return Note(
        id=note_id or f"note-{session_date.isoformat()}",
        client_name=client_name,
        session_date=session_date,
        created_at=datetime(2024, 1, 1, 12, 0, 0),
        **overrides,
    )


class StubGateway:
    """
    In-memory stand-in for SessionNoteGateway.

    list/create/delete are AsyncMocks wrapping the stub behaviour, so tests
    can assert call counts and swap in failures with return_value.
    """

    def __init__(self) -> None:
        self.rows: dict[str, Note] = {}
        self._ids = count(1)
        self.list = AsyncMock(side_effect=self._list)
        self.create = AsyncMock(side_effect=self._create)
        self.delete = AsyncMock(side_effect=self._delete)

    def seed(self, *notes: Note) -> None:
        for note in notes:
            self.rows[note.id] = note

    async def _list(self, limit: int | None = None) -> Outcome[list[Note]]:
        notes = sorted(self.rows.values(), key=lambda n: n.session_date, reverse=True)
        return Outcome.success(notes[: limit or 200])

    async def _create(self, validated: ValidatedNote) -> Outcome[Note]:
        note = Note(
            id=f"srv-{next(self._ids)}",
            created_at=datetime(2024, 6, 1, 9, 30, 0),
            **validated.model_dump(),
        )
        self.rows[note.id] = note
        return Outcome.success(note)

    async def _delete(self, note_id: str) -> Outcome[bool]:
        if self.rows.pop(note_id, None) is None:
            return Outcome.failure(NotFoundOrAlreadyDeletedError(note_id))
        return Outcome.success(True)


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def store_failure() -> Outcome:
    return Outcome.failure(StoreError('null value in column "client_name" violates not-null constraint'))


@pytest.fixture
def transport_failure() -> Outcome:
    return Outcome.failure(TransportError("connection refused"))


@pytest.fixture
def note_factory():
    """Return the make_note builder."""
    return make_note
