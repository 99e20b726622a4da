"""
TableBook Backend — Booking Service
=====================================

What:  Listing, creation, in-place update and deletion of table reservations.
How:   Each operation executes exactly one statement inside `db.session()`;
       data-access failures surface as DatabaseError from the session itself.
Who:   Called by the /reservation route handlers.

Empty Results:
    Both listing operations treat "no rows" as NotFoundError (→ 404) rather
    than an empty array. Clients of the public API depend on this shape.

Required Fields:
    date, number_of_guest, full_name, email and phone_number must be present
    and truthy on create and on update. The check runs before a session is
    opened, so a rejected request never touches the pool.
"""

import logging
from typing import List, Sequence, Union

from sqlalchemy import delete, select, update

from tablebook.database import Database
from tablebook.exceptions import NotFoundError, ValidationError
from tablebook.models.booking import Booking
from tablebook.schemas.booking import BookingCreate, BookingRecord, BookingUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: Sequence[str] = (
    "date",
    "number_of_guest",
    "full_name",
    "email",
    "phone_number",
)


def require_fields(payload: BookingCreate) -> None:
    """
    Rejects a payload with any required field missing or falsy.

    Zero guests and empty strings count as missing.

    Raises:
        ValidationError: "Please fulfill all required fields" (→ 400)
    """
    missing = [name for name in REQUIRED_FIELDS if not getattr(payload, name)]
    if missing:
        raise ValidationError(context={"missing_fields": missing})


class BookingService:
    """
    Business logic layer for reservation operations.

    Responsibilities:
        - list_bookings():      every booking, newest id first
        - list_user_bookings(): bookings owned by one user, newest id first
        - create_booking():     validated insert
        - update_booking():     validated full replacement by id
        - delete_booking():     delete by id, returning the removed row
    """

    async def list_bookings(self, db: Database) -> List[BookingRecord]:
        """
        Raises:
            NotFoundError: "No records" when the table is empty (→ 404)
        """
        async with db.session() as session:
            result = await session.scalars(select(Booking).order_by(Booking.id.desc()))
            bookings = [BookingRecord.model_validate(b) for b in result.all()]

        if not bookings:
            raise NotFoundError("No records")
        return bookings

    async def list_user_bookings(self, db: Database, user_id: str) -> List[BookingRecord]:
        """
        Query plan:
            SELECT * FROM bookings WHERE user_id = :uid ORDER BY id DESC
            → idx_bookings_user_id

        Raises:
            NotFoundError: "Bookings does not exists" when the user has none (→ 404)
        """
        async with db.session() as session:
            result = await session.scalars(
                select(Booking)
                .where(Booking.user_id == user_id)
                .order_by(Booking.id.desc())
            )
            bookings = [BookingRecord.model_validate(b) for b in result.all()]

        if not bookings:
            raise NotFoundError("Bookings does not exists", context={"user_id": user_id})
        return bookings

    async def create_booking(self, db: Database, payload: BookingCreate) -> BookingRecord:
        """
        Insert a new booking after the required-field check.

        The owning user id is stored as given, without checking that the user exists.

        Raises:
            ValidationError: A required field is missing (→ 400), nothing written
            DatabaseError: Insert failed (→ 500)
        """
        require_fields(payload)

        async with db.session() as session:
            booking = Booking(**payload.model_dump())
            session.add(booking)
            await session.flush()  # assigns the database id
            record = BookingRecord.model_validate(booking)

        logger.info("Booking %d created for %s", record.id, record.date.isoformat())
        return record

    async def update_booking(self, db: Database, payload: BookingUpdate) -> BookingRecord:
        """
        Replace the mutable fields of an existing booking.

        Query plan:
            UPDATE bookings SET date, number_of_guest, full_name, email,
                   phone_number, description, title
            WHERE id = :id RETURNING *

        `user_id` from the payload is not part of the statement: ownership
        set at creation is never changed by an update.

        Raises:
            ValidationError: A required field is missing (→ 400), nothing written
            NotFoundError: "Reservation not found" (→ 404)
            DatabaseError: Update failed (→ 500)
        """
        require_fields(payload)

        stmt = (
            update(Booking)
            .where(Booking.id == payload.id)
            .values(
                date=payload.date,
                number_of_guest=payload.number_of_guest,
                full_name=payload.full_name,
                email=payload.email,
                phone_number=payload.phone_number,
                description=payload.description,
                title=payload.title,
            )
            .returning(Booking)
        )

        async with db.session() as session:
            booking = (await session.scalars(stmt)).one_or_none()
            record = BookingRecord.model_validate(booking) if booking is not None else None

        if record is None:
            raise NotFoundError("Reservation not found", context={"booking_id": payload.id})

        logger.info("Booking %d updated", record.id)
        return record

    async def delete_booking(self, db: Database, booking_id: Union[int, str]) -> BookingRecord:
        """
        Delete a booking and return the row as it was.

        `booking_id` arrives as the raw path segment. A value that is not an
        integer cannot name a booking and is reported as not found without
        touching the pool.

        Raises:
            NotFoundError: "Reservation not found" (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        try:
            key = int(booking_id)
        except ValueError:
            raise NotFoundError("Reservation not found", context={"booking_id": booking_id})

        stmt = delete(Booking).where(Booking.id == key).returning(Booking)

        async with db.session() as session:
            booking = (await session.scalars(stmt)).one_or_none()
            record = BookingRecord.model_validate(booking) if booking is not None else None

        if record is None:
            raise NotFoundError("Reservation not found", context={"booking_id": booking_id})

        logger.info("Booking %d deleted", record.id)
        return record


# ── Singleton Instance ────────────────────────────────────────────────────
booking_service = BookingService()
