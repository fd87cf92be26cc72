"""
Notes Repository.

Owns the in-memory, ordered collection of confirmed session notes and keeps
it in step with the remote store through the gateway. Presentation code
reads notes/loading/last_error and calls refresh/create/remove.

Ordering: session_date descending; among equal dates the most recently
added note comes first. Only notes returned by the store ever enter the
collection.

Overlapping calls are not serialized. If two operations are in flight
their mutations land in completion order.
"""

from collections.abc import Callable, Iterator, Mapping
from typing import Any

from sessionnotes.core.exceptions import ErrorKind
from sessionnotes.core.logging import get_logger
from sessionnotes.gateway.session_notes import SessionNoteGateway
from sessionnotes.schemas.base import NoteError, Outcome
from sessionnotes.schemas.session_note import Note, NoteDraft, ValidatedNote
from sessionnotes.services.validator import validate

logger = get_logger(__name__)

Validator = Callable[[NoteDraft | Mapping[str, Any]], Outcome[ValidatedNote]]


class NotesRepository:
    """
    Read model and mutation entry point for session notes.

    Args:
        gateway: Remote store adapter, built once at process start
        validator: Draft check run before any create reaches the gateway
    """

    def __init__(
        self,
        gateway: SessionNoteGateway,
        validator: Validator = validate,
    ) -> None:
        self._gateway = gateway
        self._validate = validator
        self._notes: list[Note] = []
        self.loading = False
        self.last_error: NoteError | None = None

    @property
    def notes(self) -> tuple[Note, ...]:
        """Snapshot of the ordered collection."""
        return tuple(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(tuple(self._notes))

    def get(self, note_id: str) -> Note | None:
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    async def refresh(self) -> Outcome[list[Note]]:
        """
        Reload the whole collection from the store.

        On failure the previous collection is kept and last_error is set.
        loading is cleared however the call ends.
        """
        self.loading = True
        try:
            outcome = await self._gateway.list()
        finally:
            self.loading = False

        if not outcome.ok:
            self.last_error = outcome.error
            logger.warning("Refresh failed", kind=outcome.error.kind.value)
            return outcome

        self._notes = _deduplicated(outcome.value)
        self.last_error = None
        logger.info("Notes refreshed", count=len(self._notes))
        return outcome

    async def create(self, draft: NoteDraft | Mapping[str, Any]) -> Outcome[Note]:
        """
        Validate a draft, persist it, and merge the stored note.

        Invalid drafts never reach the gateway. The note is inserted only
        after the store confirms it, at the position its session date
        dictates.
        """
        checked = self._validate(draft)
        if not checked.ok:
            self.last_error = checked.error
            logger.info("Draft rejected", kind=checked.error.kind.value)
            return Outcome[Note].failure(checked.error)

        self.last_error = None
        outcome = await self._gateway.create(checked.value)
        if not outcome.ok:
            self.last_error = outcome.error
            logger.warning("Create failed", kind=outcome.error.kind.value)
            return outcome

        self._insert(outcome.value)
        logger.info(
            "Note created",
            note_id=outcome.value.id,
            session_date=outcome.value.session_date.isoformat(),
        )
        return outcome

    async def remove(self, note_id: str) -> Outcome[bool]:
        """
        Delete a note from the store, then from the collection.

        Removing an id the store no longer has counts as success.
        """
        outcome = await self._gateway.delete(note_id)
        if not outcome.ok:
            if outcome.error.kind is not ErrorKind.NOT_FOUND_OR_ALREADY_DELETED:
                self.last_error = outcome.error
                logger.warning("Remove failed", note_id=note_id, kind=outcome.error.kind.value)
                return outcome
            logger.debug("Note already gone", note_id=note_id)

        self._notes = [note for note in self._notes if note.id != note_id]
        logger.info("Note removed", note_id=note_id)
        return Outcome[bool].success(True)

    def _insert(self, note: Note) -> None:
        """Place a note ahead of every note with the same or an older date."""
        notes = [existing for existing in self._notes if existing.id != note.id]
        index = len(notes)
        for position, existing in enumerate(notes):
            if existing.session_date <= note.session_date:
                index = position
                break
        notes.insert(index, note)
        self._notes = notes


def _deduplicated(notes: list[Note]) -> list[Note]:
    seen: set[str] = set()
    unique = []
    for note in notes:
        if note.id not in seen:
            seen.add(note.id)
            unique.append(note)
    return unique
