"""
TableBook Backend — Booking Request/Response Schemas
======================================================

What:  Pydantic models defining the /reservation API contract.
How:   Request models declare every field optional, and a falsy value for a
       required field is read as None before type parsing. A missing required
       field therefore reaches the service's own check and is reported as 400
       "Please fulfill all required fields", the same message for an absent
       key, a null, an empty string, a zero or false. Pydantic still rejects
       non-empty values of the wrong type (e.g. an unparseable date).

Response envelopes mirror the public contract exactly, including the
camelCase `deletedReservation` key on delete.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class BookingCreate(BaseModel):
    """Body of POST /reservation."""
    date: Optional[datetime.date] = Field(default=None, description="Reservation date (YYYY-MM-DD)")
    number_of_guest: Optional[int] = Field(default=None, description="Party size")
    full_name: Optional[str] = Field(default=None, description="Booking holder's full name")
    email: Optional[str] = Field(default=None, description="Contact email")
    phone_number: Optional[str] = Field(default=None, description="Contact phone number")
    description: Optional[str] = Field(default=None, description="Free-text notes")
    user_id: Optional[str] = Field(default=None, description="Owning user identifier")
    title: Optional[str] = Field(default=None, description="Optional title")

    @field_validator("date", "number_of_guest", "full_name", "email", "phone_number", mode="before")
    @classmethod
    def blank_as_missing(cls, v):
        """Empty strings, zero, false and other falsy inputs count as not supplied."""
        return v if v else None


class BookingUpdate(BookingCreate):
    """
    Body of PUT /reservation: the booking id plus the create fields.

    `user_id` is accepted for shape compatibility with create but is not
    written by the update statement.
    """
    id: Optional[int] = Field(default=None, description="Identifier of the booking to replace")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class BookingRecord(BaseModel):
    """A row of the bookings table."""
    id: int
    date: datetime.date
    number_of_guest: int
    full_name: str
    email: str
    phone_number: str
    description: Optional[str] = None
    user_id: Optional[str] = None
    title: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingCreatedResponse(BaseModel):
    """Returned by POST /reservation with HTTP 201 Created."""
    message: str = Field(default="Reservation added successful")
    details: BookingRecord


class BookingUpdatedResponse(BaseModel):
    """Returned by PUT /reservation."""
    message: str = Field(default="Reservation updated")
    details: BookingRecord


class BookingDeletedResponse(BaseModel):
    """Returned by DELETE /reservation/{id}."""
    message: str = Field(default="Reservation deleted successfully")
    deleted_reservation: BookingRecord = Field(alias="deletedReservation")

    model_config = {"populate_by_name": True}
