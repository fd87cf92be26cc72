"""
Application Wiring.

Builds the engine, gateway and repository once at process start. Callers
hold on to the returned objects; nothing here is cached globally.

Usage:
    from sessionnotes.app import bootstrap

    app = bootstrap()
    await app.repository.refresh()
    ...
    await app.close()
"""

from dataclasses import dataclass
from functools import partial

from sqlalchemy.ext.asyncio import AsyncEngine

from sessionnotes.core.config_schema import NotesSchema
from sessionnotes.core.database import create_engine, create_session_factory
from sessionnotes.core.logging import get_logger, setup_logging
from sessionnotes.gateway.session_notes import SessionNoteGateway
from sessionnotes.models.base import Base
from sessionnotes.repositories.session_notes import NotesRepository
from sessionnotes.services.note_form import NoteForm
from sessionnotes.services.validator import validate

logger = get_logger(__name__)


def _notes_config(notes_config: NotesSchema | None) -> NotesSchema:
    if notes_config is not None:
        return notes_config
    from sessionnotes.core.config import get_app_config

    return get_app_config().notes


def build_engine(url: str | None = None) -> AsyncEngine:
    """Create the store engine from config, or from an explicit URL."""
    return create_engine(url)


def build_gateway(
    engine: AsyncEngine,
    notes_config: NotesSchema | None = None,
) -> SessionNoteGateway:
    notes_config = _notes_config(notes_config)
    return SessionNoteGateway(
        create_session_factory(engine),
        list_limit=notes_config.list_limit,
    )


def build_repository(
    engine: AsyncEngine,
    notes_config: NotesSchema | None = None,
) -> NotesRepository:
    """Wire a repository to a fresh gateway over the given engine."""
    notes_config = _notes_config(notes_config)
    repository = NotesRepository(
        build_gateway(engine, notes_config),
        validator=partial(validate, max_free_text_length=notes_config.max_free_text_length),
    )
    logger.debug("Repository ready", list_limit=notes_config.list_limit)
    return repository


def build_form(
    repository: NotesRepository,
    notes_config: NotesSchema | None = None,
) -> NoteForm:
    return NoteForm(repository, defaults=_notes_config(notes_config))


async def create_schema(engine: AsyncEngine) -> None:
    """Create the session_notes table if it does not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready", tables=sorted(Base.metadata.tables))


@dataclass
class Application:
    """Collaborators built by bootstrap(), owned by the caller."""

    engine: AsyncEngine
    repository: NotesRepository
    form: NoteForm

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Application closed")


def bootstrap(
    url: str | None = None,
    notes_config: NotesSchema | None = None,
) -> Application:
    """
    Configure logging and build the engine, repository and form.

    Entry point for hosts embedding the notes layer. Logging is set up from
    config/settings/logging.yaml before anything else logs, so the project
    root must be locatable.

    Args:
        url: Store URL; built from configuration when None
        notes_config: Note limits; loaded from notes.yaml when None

    Returns:
        Application holding the wired collaborators
    """
    from sessionnotes.core.config import validate_project_root

    validate_project_root()
    setup_logging()

    notes_config = _notes_config(notes_config)
    engine = build_engine(url)
    repository = build_repository(engine, notes_config)
    form = build_form(repository, notes_config)
    logger.info("Application started", list_limit=notes_config.list_limit)
    return Application(engine=engine, repository=repository, form=form)
