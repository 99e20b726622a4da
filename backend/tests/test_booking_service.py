"""
TableBook Backend — Booking Service Tests
===========================================

What:  Tests for BookingService against a real (SQLite) pool.

What we test:
    ✅ Listing order (descending id) and the 404-on-empty policy
    ✅ Required-field validation happens before the pool is touched
    ✅ Update replaces mutable fields but never user_id
    ✅ Delete returns the removed row, and a second delete is NotFoundError
"""

import datetime
from unittest.mock import MagicMock

import pytest

from tablebook.exceptions import NotFoundError, ValidationError
from tablebook.schemas.booking import BookingCreate, BookingUpdate
from tablebook.services.booking_service import BookingService, REQUIRED_FIELDS


@pytest.fixture
def service():
    return BookingService()


class TestBookingServiceList:
    """Tests for list_bookings and list_user_bookings."""

    @pytest.mark.asyncio
    async def test_list_empty_raises_no_records(self, service, database):
        with pytest.raises(NotFoundError) as exc_info:
            await service.list_bookings(database)
        assert exc_info.value.message == "No records"

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, service, database, booking_payload):
        first = await service.create_booking(database, BookingCreate(**booking_payload))
        second = await service.create_booking(
            database, BookingCreate(**{**booking_payload, "full_name": "Grace Hopper"})
        )

        bookings = await service.list_bookings(database)

        assert [b.id for b in bookings] == [second.id, first.id]
        assert bookings[0].full_name == "Grace Hopper"

    @pytest.mark.asyncio
    async def test_list_user_bookings_filters_by_owner(self, service, database, booking_payload):
        mine = await service.create_booking(database, BookingCreate(**booking_payload))
        await service.create_booking(
            database, BookingCreate(**{**booking_payload, "user_id": "someone-else"})
        )

        bookings = await service.list_user_bookings(database, "user-ada")

        assert [b.id for b in bookings] == [mine.id]

    @pytest.mark.asyncio
    async def test_list_user_bookings_none_raises(self, service, database):
        with pytest.raises(NotFoundError) as exc_info:
            await service.list_user_bookings(database, "nobody")
        assert exc_info.value.message == "Bookings does not exists"


class TestBookingServiceCreate:
    """Tests for create_booking."""

    @pytest.mark.asyncio
    async def test_create_returns_record_with_id(self, service, database, booking_payload):
        record = await service.create_booking(database, BookingCreate(**booking_payload))

        assert record.id >= 1
        assert record.date == datetime.date(2024, 6, 14)
        assert record.number_of_guest == 4
        assert record.user_id == "user-ada"
        assert record.title == "Birthday dinner"

    @pytest.mark.asyncio
    async def test_optional_fields_may_be_absent(self, service, database, booking_payload):
        for optional in ("description", "user_id", "title"):
            booking_payload.pop(optional)

        record = await service.create_booking(database, BookingCreate(**booking_payload))

        assert record.description is None
        assert record.user_id is None
        assert record.title is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", REQUIRED_FIELDS)
    async def test_missing_required_field_never_touches_pool(self, service, booking_payload, field):
        booking_payload.pop(field)
        db = MagicMock()

        with pytest.raises(ValidationError) as exc_info:
            await service.create_booking(db, BookingCreate(**booking_payload))

        assert exc_info.value.message == "Please fulfill all required fields"
        assert exc_info.value.context["missing_fields"] == [field]
        db.session.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, falsy",
        [
            ("number_of_guest", 0),
            ("number_of_guest", ""),
            ("full_name", ""),
            ("full_name", 0),
            ("phone_number", ""),
            ("date", ""),
            ("email", False),
        ],
    )
    async def test_falsy_required_field_is_missing(self, service, database, booking_payload, field, falsy):
        booking_payload[field] = falsy

        with pytest.raises(ValidationError):
            await service.create_booking(database, BookingCreate(**booking_payload))

        with pytest.raises(NotFoundError):
            await service.list_bookings(database)


class TestBookingServiceUpdate:
    """Tests for update_booking."""

    @pytest.mark.asyncio
    async def test_update_replaces_mutable_fields(self, service, database, booking_payload):
        created = await service.create_booking(database, BookingCreate(**booking_payload))
        changes = {
            **booking_payload,
            "id": created.id,
            "date": "2024-07-01",
            "number_of_guest": 2,
            "description": None,
            "title": "Anniversary",
        }

        updated = await service.update_booking(database, BookingUpdate(**changes))

        assert updated.id == created.id
        assert updated.date == datetime.date(2024, 7, 1)
        assert updated.number_of_guest == 2
        assert updated.description is None
        assert updated.title == "Anniversary"

    @pytest.mark.asyncio
    async def test_update_never_changes_owner(self, service, database, booking_payload):
        created = await service.create_booking(database, BookingCreate(**booking_payload))

        updated = await service.update_booking(
            database,
            BookingUpdate(**{**booking_payload, "id": created.id, "user_id": "new-owner"}),
        )

        assert updated.user_id == "user-ada"
        assert [b.id for b in await service.list_user_bookings(database, "user-ada")] == [created.id]

    @pytest.mark.asyncio
    async def test_update_unknown_id_leaves_bookings_unchanged(self, service, database, booking_payload):
        created = await service.create_booking(database, BookingCreate(**booking_payload))

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_booking(
                database,
                BookingUpdate(**{**booking_payload, "id": created.id + 100, "full_name": "Nobody"}),
            )

        assert exc_info.value.message == "Reservation not found"
        bookings = await service.list_bookings(database)
        assert len(bookings) == 1
        assert bookings[0].full_name == "Ada Lovelace"

    @pytest.mark.asyncio
    async def test_update_validates_before_lookup(self, service, booking_payload):
        booking_payload.pop("email")
        db = MagicMock()

        with pytest.raises(ValidationError):
            await service.update_booking(db, BookingUpdate(**{**booking_payload, "id": 1}))

        db.session.assert_not_called()


class TestBookingServiceDelete:
    """Tests for delete_booking."""

    @pytest.mark.asyncio
    async def test_delete_twice(self, service, database, booking_payload):
        created = await service.create_booking(database, BookingCreate(**booking_payload))

        deleted = await service.delete_booking(database, created.id)
        assert deleted == created

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_booking(database, created.id)
        assert exc_info.value.message == "Reservation not found"

    @pytest.mark.asyncio
    async def test_delete_non_integer_id_never_touches_pool(self, service):
        db = MagicMock()

        with pytest.raises(NotFoundError) as exc_info:
            await service.delete_booking(db, "abc")

        assert exc_info.value.message == "Reservation not found"
        db.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_accepts_path_string(self, service, database, booking_payload):
        created = await service.create_booking(database, BookingCreate(**booking_payload))

        deleted = await service.delete_booking(database, str(created.id))

        assert deleted.id == created.id
