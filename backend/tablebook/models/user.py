"""
TableBook Backend — User SQLAlchemy Model
===========================================

What:  ORM model for the `users` table.
Who:   Read and inserted by UserService.

Lifecycle:
    Created through registration, read by id. Never updated or deleted by
    this service.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from tablebook.database import Base


class User(Base):
    """A registered application user, keyed by a caller-supplied identifier."""

    __tablename__ = "users"

    # Caller-supplied (e.g. the identity provider's uid), so no server default
    id: Mapped[str] = mapped_column(String(128), primary_key=True)

    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', email='{self.email}')>"
