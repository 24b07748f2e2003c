"""
Pydantic models for user data.

Defines schemas for creating, replacing and reading users.  The wire
format is a flat object with the keys ``id``, ``username``, ``email``,
``fullName`` and ``active``; ``full_name`` is accepted on input as
well.  Structural validation (blank username, malformed e-mail)
happens here, before a request ever reaches ``UserService``.
"""

from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    username: str = Field(..., examples=["john_doe"])
    email: str = Field(..., examples=["john@example.com"])
    full_name: Optional[str] = Field(None, alias="fullName", examples=["John Doe"])
    active: bool = Field(True, examples=[True])

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Username is required")
        return v

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, v: str) -> str:
        # Checked for shape only; the address is stored exactly as sent.
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(str(exc)) from exc
        return v


class UserCreate(UserBase):
    """Schema for registering a user.

    An ``id`` sent by the client is ignored; the store assigns one.
    ``active`` defaults to ``True`` when omitted.
    """


class UserUpdate(UserBase):
    """Complete replacement payload for an existing user.

    All four mutable fields are written as a unit; there is no partial
    update.  ``active`` defaults to ``True`` when omitted, the same as
    on creation.
    """


class UserRead(UserBase):
    """Schema for reading a user from the API."""

    id: int
