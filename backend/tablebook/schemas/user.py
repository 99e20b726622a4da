"""
TableBook Backend — User Request/Response Schemas
===================================================

What:  Pydantic models for the /users and /signup contracts.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    """
    Body of POST /signup.

    Only `id` is structurally required; name and email are stored as given,
    without format validation. The id is an opaque token: a JSON number is
    stored as its decimal string.
    """
    id: str = Field(description="Caller-supplied unique user identifier")
    name: Optional[str] = Field(default=None, description="Display name")
    email: Optional[str] = Field(default=None, description="Contact email")

    @field_validator("id", mode="before")
    @classmethod
    def numeric_id_as_string(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class UserRecord(BaseModel):
    """A row of the users table, returned by GET /users/{id}."""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = {"from_attributes": True}


class UserRegisterResponse(BaseModel):
    """Returned by POST /signup with HTTP 201 Created."""
    message: str = Field(default="User register successful")
    details: UserRecord
