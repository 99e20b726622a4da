"""
TableBook Backend — User Route Handlers
=========================================

What:  GET /users/{id} and POST /signup.
"""

from fastapi import APIRouter, Depends

from tablebook.database import Database, get_database
from tablebook.schemas.common import MessageResponse
from tablebook.schemas.user import UserCreate, UserRecord, UserRegisterResponse
from tablebook.services.user_service import user_service

router = APIRouter(tags=["Users"])


@router.get(
    "/users/{user_id}",
    response_model=UserRecord,
    responses={
        404: {"description": "User not found", "model": MessageResponse},
        500: {"description": "Server error", "model": MessageResponse},
    },
    summary="Get a user by identifier",
)
async def get_user(
    user_id: str,
    db: Database = Depends(get_database),
) -> UserRecord:
    return await user_service.get_user(db=db, user_id=user_id)


@router.post(
    "/signup",
    status_code=201,
    response_model=UserRegisterResponse,
    responses={
        400: {"description": "User already exists", "model": MessageResponse},
        500: {"description": "Server error", "model": MessageResponse},
    },
    summary="Register a new user",
)
async def signup(
    payload: UserCreate,
    db: Database = Depends(get_database),
) -> UserRegisterResponse:
    """
    Register a user under a caller-supplied identifier.

    A second registration with the same id returns 400 "User existed" and
    leaves the stored user untouched.
    """
    user = await user_service.register_user(db=db, payload=payload)
    return UserRegisterResponse(details=user)
