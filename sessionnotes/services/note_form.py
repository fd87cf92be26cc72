"""
Note Form State.

Transient draft fields behind the note submission form, plus the saving
flag that keeps a second submit from starting while one is in flight.
"""

from collections.abc import Callable
from datetime import date

from sessionnotes.core.config_schema import NotesSchema
from sessionnotes.core.exceptions import SubmissionInProgressError
from sessionnotes.core.logging import get_logger, log_with_source
from sessionnotes.repositories.session_notes import NotesRepository
from sessionnotes.schemas.base import Outcome
from sessionnotes.schemas.session_note import Note, NoteDraft

logger = get_logger(__name__)


class NoteForm:
    """
    Draft state for one note being entered.

    Args:
        repository: Repository the draft is submitted to
        today: Clock for the default session date
        defaults: Duration defaults; notes.yaml values when built by the app
    """

    def __init__(
        self,
        repository: NotesRepository,
        today: Callable[[], date] = date.today,
        defaults: NotesSchema | None = None,
    ) -> None:
        self._repository = repository
        self._today = today
        self._defaults = defaults or NotesSchema()
        self.saving = False
        self.client_name = ""
        self.session_date: date | str | None = today()
        self.free_text = ""
        self.duration_minutes: int | str | None = self._defaults.initial_duration_minutes

    def to_draft(self) -> NoteDraft:
        return NoteDraft(
            client_name=self.client_name,
            session_date=self.session_date,
            free_text=self.free_text,
            duration_minutes=self.duration_minutes,
        )

    def reset(self) -> None:
        """Clear the fields after a successful save."""
        self.client_name = ""
        self.session_date = self._today()
        self.free_text = ""
        self.duration_minutes = self._defaults.post_save_duration_minutes

    async def submit(self) -> Outcome[Note]:
        """
        Submit the current draft.

        Fields are kept on failure so the user can correct them.
        """
        if self.saving:
            log_with_source(logger, "ui", "info", "Submit ignored while saving")
            return Outcome[Note].failure(SubmissionInProgressError())

        self.saving = True
        try:
            outcome = await self._repository.create(self.to_draft())
        finally:
            self.saving = False

        if outcome.ok:
            self.reset()
        return outcome
