"""
Session Note Model.

Mapping of the remote session_notes table. Attribute names follow the
Note schema; column names follow the stored table.
"""

from datetime import date

from sqlalchemy import Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sessionnotes.models.base import Base, CreatedAtMixin, UUIDMixin


class SessionNote(UUIDMixin, CreatedAtMixin, Base):
    """
    Session note database model.

    Length and sign limits on free_text and duration_minutes are enforced
    by the validator, not by the table.
    """

    __tablename__ = "session_notes"

    client_name: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )
    session_date: Mapped[date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    free_text: Mapped[str | None] = mapped_column(
        "notes",
        Text,
        nullable=True,
    )
    duration_minutes: Mapped[int | None] = mapped_column(
        "duration",
        Integer,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<SessionNote(id={self.id}, client_name={self.client_name!r}, session_date={self.session_date})>"
