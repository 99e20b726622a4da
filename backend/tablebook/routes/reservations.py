"""
TableBook Backend — Reservation Route Handlers
================================================

What:  CRUD over the bookings table under /reservation.
How:   Each handler delegates to BookingService with the injected Database.

Note on GET /reservation/{id}:
    The path id on GET is the OWNING USER's identifier, while the path id on
    DELETE is the booking's own identifier. Both shapes are part of the
    public contract.
"""

from typing import List

from fastapi import APIRouter, Depends

from tablebook.database import Database, get_database
from tablebook.schemas.booking import (
    BookingCreate,
    BookingCreatedResponse,
    BookingDeletedResponse,
    BookingRecord,
    BookingUpdate,
    BookingUpdatedResponse,
)
from tablebook.schemas.common import MessageResponse
from tablebook.services.booking_service import booking_service

router = APIRouter(prefix="/reservation", tags=["Reservations"])

_SERVER_ERROR = {"description": "Server error", "model": MessageResponse}


@router.get(
    "",
    response_model=List[BookingRecord],
    responses={
        404: {"description": "No bookings exist", "model": MessageResponse},
        500: _SERVER_ERROR,
    },
    summary="List all bookings, newest first",
)
async def list_reservations(
    db: Database = Depends(get_database),
) -> List[BookingRecord]:
    """An empty table is reported as 404 "No records", not an empty array."""
    return await booking_service.list_bookings(db=db)


@router.get(
    "/{user_id}",
    response_model=List[BookingRecord],
    responses={
        404: {"description": "User has no bookings", "model": MessageResponse},
        500: _SERVER_ERROR,
    },
    summary="List the bookings of one user, newest first",
)
async def list_user_reservations(
    user_id: str,
    db: Database = Depends(get_database),
) -> List[BookingRecord]:
    return await booking_service.list_user_bookings(db=db, user_id=user_id)


@router.post(
    "",
    status_code=201,
    response_model=BookingCreatedResponse,
    responses={
        400: {"description": "Missing required fields", "model": MessageResponse},
        500: _SERVER_ERROR,
    },
    summary="Create a booking",
)
async def create_reservation(
    payload: BookingCreate,
    db: Database = Depends(get_database),
) -> BookingCreatedResponse:
    booking = await booking_service.create_booking(db=db, payload=payload)
    return BookingCreatedResponse(details=booking)


@router.put(
    "",
    response_model=BookingUpdatedResponse,
    responses={
        400: {"description": "Missing required fields", "model": MessageResponse},
        404: {"description": "Reservation not found", "model": MessageResponse},
        500: _SERVER_ERROR,
    },
    summary="Replace the details of a booking",
)
async def update_reservation(
    payload: BookingUpdate,
    db: Database = Depends(get_database),
) -> BookingUpdatedResponse:
    """The booking id travels in the body; `user_id` in the body is ignored."""
    booking = await booking_service.update_booking(db=db, payload=payload)
    return BookingUpdatedResponse(details=booking)


@router.delete(
    "/{booking_id}",
    response_model=BookingDeletedResponse,
    responses={
        404: {"description": "Reservation not found", "model": MessageResponse},
        500: _SERVER_ERROR,
    },
    summary="Delete a booking",
)
async def delete_reservation(
    booking_id: str,
    db: Database = Depends(get_database),
) -> BookingDeletedResponse:
    """Ids that are not integers match no booking and return 404."""
    booking = await booking_service.delete_booking(db=db, booking_id=booking_id)
    return BookingDeletedResponse(deleted_reservation=booking)
