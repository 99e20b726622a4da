"""
TableBook Backend — Booking SQLAlchemy Model
==============================================

What:  ORM model representing the `bookings` table.
Who:   Used by BookingService for every reservation statement.

Table Design:
    - id: Integer primary key assigned by the database (SERIAL on PostgreSQL)
    - date, number_of_guest, full_name, email, phone_number: required on
      create and on every update (enforced by the service before any write)
    - description, title: optional free text
    - user_id: optional owner reference. Deliberately not a foreign key: the
      service never checks it against the users table, and bookings may be
      made by guests without an account.

Query Patterns:
    - List all:      SELECT ... ORDER BY id DESC                (primary key index)
    - List by owner: SELECT ... WHERE user_id = :uid ORDER BY id DESC
                     → idx_bookings_user_id
"""

import datetime
from typing import Optional

from sqlalchemy import Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tablebook.database import Base


class Booking(Base):
    """A table reservation with party size and contact details."""

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Required booking details ──────────────────────────────────────────
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    number_of_guest: Mapped[int] = mapped_column(Integer, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)

    # ── Optional fields ───────────────────────────────────────────────────
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    __table_args__ = (
        Index("idx_bookings_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, date='{self.date}', "
            f"number_of_guest={self.number_of_guest}, user_id='{self.user_id}')>"
        )
