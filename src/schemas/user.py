"""Pydantic schemas for user endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.validators import reject_null


class UserUpdate(BaseModel):
    """
    Schema for editing the current user.

    Only fields present in the body are applied. Accepts camelCase
    (firstName) as well as snake_case (first_name) keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    email: EmailStr | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def check_email_not_null(cls, v: str | None) -> str | None:
        """Email may be omitted but not cleared."""
        return reject_null(v, "email")


class UserResponse(BaseModel):
    """Response model for user info. The password hash is never included."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
