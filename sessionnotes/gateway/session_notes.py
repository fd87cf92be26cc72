"""
Session Note Gateway.

Thin adapter between the notes repository and the remote session_notes
table. Each call opens its own session and transaction from the injected
session factory and returns an Outcome; store and transport failures are
reported as values, never raised.

Usage:
    gateway = SessionNoteGateway(create_session_factory(engine))

    outcome = await gateway.list()
    if not outcome.ok:
        print(outcome.error.kind, outcome.error.message)
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    InterfaceError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sessionnotes.core.exceptions import (
    ApplicationError,
    NotFoundOrAlreadyDeletedError,
    StoreError,
    TransportError,
)
from sessionnotes.core.logging import get_logger
from sessionnotes.models.session_note import SessionNote
from sessionnotes.schemas.base import Outcome
from sessionnotes.schemas.session_note import Note, ValidatedNote

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_LIST_LIMIT = 200

_TRANSPORT_ERRORS = (
    OSError,
    asyncio.TimeoutError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
)


def _is_transport_failure(exc: BaseException) -> bool:
    if isinstance(exc, _TRANSPORT_ERRORS):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


class SessionNoteGateway:
    """
    Remote store adapter for session notes.

    No retries happen here; a failed call is reported once and the caller
    decides whether to try again.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        list_limit: int = DEFAULT_LIST_LIMIT,
    ) -> None:
        self._session_factory = session_factory
        self.list_limit = list_limit

    async def _execute(
        self,
        operation: str,
        work: Callable[[AsyncSession], Awaitable[T]],
    ) -> Outcome[T]:
        """
        Run one unit of work in its own transaction and normalize the result.

        Args:
            operation: Operation name for logging
            work: Coroutine function receiving the open session

        Returns:
            Outcome with the work's return value, or a TransportError,
            StoreError or NotFoundOrAlreadyDeleted error
        """
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    value = await work(session)
        except ApplicationError as e:
            logger.info("Store operation reported", operation=operation, kind=e.kind.value)
            return Outcome.failure(e)
        except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
            if _is_transport_failure(e):
                logger.warning("Store unreachable", operation=operation, error=str(e))
                return Outcome.failure(TransportError(str(e) or "Remote store unreachable"))
            logger.error("Store rejected operation", operation=operation, error=str(e))
            return Outcome.failure(StoreError(_store_message(e), details={"operation": operation}))
        except Exception as e:
            logger.error("Store operation failed", operation=operation, error=repr(e))
            return Outcome.failure(
                StoreError(str(e) or type(e).__name__, details={"operation": operation})
            )

        return Outcome.success(value)

    async def list(self, limit: int | None = None) -> Outcome[list[Note]]:
        """
        Fetch notes, newest session date first.

        Rows sharing a session date come back most recently created first.

        Args:
            limit: Maximum rows to return (defaults to the configured page size)
        """
        effective_limit = limit if limit is not None else self.list_limit

        async def work(session: AsyncSession) -> list[Note]:
            result = await session.execute(
                select(SessionNote)
                .order_by(SessionNote.session_date.desc(), SessionNote.created_at.desc())
                .limit(effective_limit)
            )
            return [Note.model_validate(row) for row in result.scalars().all()]

        outcome = await self._execute("list_notes", work)
        if outcome.ok:
            logger.debug("Notes listed", count=len(outcome.value), limit=effective_limit)
        return outcome

    async def create(self, validated: ValidatedNote) -> Outcome[Note]:
        """
        Insert a note and return the row as stored.

        The row is re-read after the insert so id and created_at carry the
        store's values.
        """

        async def work(session: AsyncSession) -> Note:
            row = SessionNote(
                client_name=validated.client_name,
                session_date=validated.session_date,
                free_text=validated.free_text,
                duration_minutes=validated.duration_minutes,
            )
            session.add(row)
            await session.flush()
            await session.refresh(row)
            return Note.model_validate(row)

        outcome = await self._execute("create_note", work)
        if outcome.ok:
            logger.debug("Note inserted", note_id=outcome.value.id)
        return outcome

    async def delete(self, note_id: str) -> Outcome[bool]:
        """
        Delete a note by id.

        A delete that matches no rows fails with NotFoundOrAlreadyDeleted.
        """

        async def work(session: AsyncSession) -> bool:
            result = await session.execute(
                delete(SessionNote).where(SessionNote.id == note_id)
            )
            if result.rowcount == 0:
                raise NotFoundOrAlreadyDeletedError(note_id)
            return True

        return await self._execute("delete_note", work)


def _store_message(exc: BaseException) -> str:
    """Driver-level message for a store failure, kept verbatim for diagnosis."""
    orig: Any = getattr(exc, "orig", None)
    if orig is not None:
        return str(orig)
    return str(exc)
