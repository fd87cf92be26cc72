"""
Unit Tests for Note Form State.
"""

import asyncio
from datetime import date

import pytest

from sessionnotes.core.config_schema import NotesSchema
from sessionnotes.core.exceptions import ErrorKind
from sessionnotes.repositories.session_notes import NotesRepository
from sessionnotes.services.note_form import NoteForm

TODAY = date(2024, 3, 15)


@pytest.fixture
def repository(stub_gateway) -> NotesRepository:
    return NotesRepository(stub_gateway)


@pytest.fixture
def form(repository) -> NoteForm:
    return NoteForm(repository, today=lambda: TODAY)


class TestDefaults:

    def test_initial_fields(self, form):
        assert form.client_name == ""
        assert form.session_date == TODAY
        assert form.free_text == ""
        assert form.duration_minutes == 15
        assert form.saving is False

    def test_initial_duration_from_config(self, repository):
        form = NoteForm(repository, today=lambda: TODAY, defaults=NotesSchema(initial_duration_minutes=50))

        assert form.duration_minutes == 50

    def test_to_draft_carries_fields(self, form):
        form.client_name = "Jane Doe"
        form.free_text = "Check-in"

        draft = form.to_draft()

        assert draft.client_name == "Jane Doe"
        assert draft.session_date == TODAY
        assert draft.free_text == "Check-in"
        assert draft.duration_minutes == 15


class TestSubmit:

    @pytest.mark.asyncio
    async def test_success_resets_fields(self, form, repository):
        form.client_name = "Jane Doe"
        form.session_date = "2024-03-01"
        form.free_text = "Discussed coping strategies"
        form.duration_minutes = 45

        outcome = await form.submit()

        assert outcome.ok
        assert len(repository) == 1
        assert form.client_name == ""
        assert form.session_date == TODAY
        assert form.free_text == ""
        assert form.duration_minutes == 15
        assert form.saving is False

    @pytest.mark.asyncio
    async def test_post_save_duration_is_configurable(self, repository):
        form = NoteForm(
            repository,
            today=lambda: TODAY,
            defaults=NotesSchema(initial_duration_minutes=15, post_save_duration_minutes=60),
        )
        form.client_name = "Jane Doe"

        await form.submit()

        assert form.duration_minutes == 60

    @pytest.mark.asyncio
    async def test_failure_keeps_fields(self, form, repository):
        form.client_name = "Jane Doe"
        form.free_text = "x" * 501

        outcome = await form.submit()

        assert outcome.error.kind is ErrorKind.NOTES_TOO_LONG
        assert form.client_name == "Jane Doe"
        assert form.free_text == "x" * 501
        assert form.saving is False
        assert len(repository) == 0

    @pytest.mark.asyncio
    async def test_second_submit_while_saving_is_refused(self, form, stub_gateway):
        release = asyncio.Event()
        create = stub_gateway.create.side_effect

        async def slow_create(validated):
            await release.wait()
            return await create(validated)

        stub_gateway.create.side_effect = slow_create
        form.client_name = "Jane Doe"

        first = asyncio.create_task(form.submit())
        await asyncio.sleep(0)
        assert form.saving is True

        second = await form.submit()
        release.set()
        first_outcome = await first

        assert second.error.kind is ErrorKind.SUBMISSION_IN_PROGRESS
        assert first_outcome.ok
        assert stub_gateway.create.await_count == 1
        assert form.saving is False
