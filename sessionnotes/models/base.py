"""
SQLAlchemy Base Model.

Base class for all database models with common fields.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class CreatedAtMixin:
    """Mixin that adds a store-assigned created_at timestamp."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.now(),
        nullable=False,
    )


class UUIDMixin:
    """
    Mixin that adds a UUID primary key.

    The id is generated client-side when the row is flushed inside the
    gateway's unit of work, never by callers. An unflushed instance has
    id None; the repository only ever sees ids returned by a completed
    insert.
    """

    id: Mapped[str] = mapped_column(
        primary_key=True,
        default=lambda: str(uuid4()),
    )
