"""
TableBook Backend — User Service
==================================

What:  Lookup by identifier and registration of application users.
Who:   Called by the /users and /signup route handlers.

Registration Policy:
    The existence check and the insert run on the same pooled session. A
    duplicate identifier is rejected with ConflictError before any write. If a
    concurrent registration inserts the same id between the check and the
    insert, the primary-key violation is reported as the same ConflictError.
    Name and email are stored exactly as given.
"""

import logging

from sqlalchemy import select

from tablebook.database import Database
from tablebook.exceptions import ConflictError, DataAccessFailure, DatabaseError, NotFoundError
from tablebook.models.user import User
from tablebook.schemas.user import UserCreate, UserRecord

logger = logging.getLogger(__name__)


class UserService:
    """Business logic for user operations."""

    async def get_user(self, db: Database, user_id: str) -> UserRecord:
        """
        Retrieve a single user by identifier.

        Query plan:
            SELECT * FROM users WHERE id = :id  → primary key lookup

        Raises:
            NotFoundError: No user with this identifier (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        async with db.session() as session:
            user = await session.scalar(select(User).where(User.id == user_id))
            record = UserRecord.model_validate(user) if user is not None else None

        if record is None:
            raise NotFoundError("User not found", context={"user_id": user_id})
        return record

    async def register_user(self, db: Database, payload: UserCreate) -> UserRecord:
        """
        Create a user unless the identifier is already taken.

        Raises:
            ConflictError: Identifier already registered (→ 400), nothing written
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            async with db.session() as session:
                existing = await session.scalar(select(User.id).where(User.id == payload.id))
                if existing is not None:
                    raise ConflictError("User existed", context={"user_id": payload.id})

                user = User(id=payload.id, name=payload.name, email=payload.email)
                session.add(user)
                await session.flush()
                record = UserRecord.model_validate(user)
        except DatabaseError as e:
            if e.kind is not DataAccessFailure.CONSTRAINT:
                raise
            logger.warning("Registration lost an insert race for user %s", payload.id)
            raise ConflictError("User existed", context={"user_id": payload.id}) from e

        logger.info("User registered: %s", record.id)
        return record


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
