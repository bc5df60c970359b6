"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.validators import (
    reject_null,
    validate_description_length,
    validate_link_length,
    validate_title_length,
)


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    # Stored as given; links are not normalized or required to be absolute URLs
    link: str = Field(..., min_length=1)
    description: str | None = None

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str) -> str:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("link")
    @classmethod
    def check_link_length(cls, v: str) -> str:
        """Validate link length."""
        return validate_link_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkUpdate(BaseModel):
    """
    Schema for updating an existing bookmark.

    Omitted fields are left unchanged. Description can be cleared with null;
    title and link cannot.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, min_length=1)
    link: str | None = Field(default=None, min_length=1)
    description: str | None = None

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str | None) -> str | None:
        """Title may be omitted but not cleared; validate length."""
        reject_null(v, "title")
        return validate_title_length(v)

    @field_validator("link")
    @classmethod
    def check_link(cls, v: str | None) -> str | None:
        """Link may be omitted but not cleared; validate length."""
        reject_null(v, "link")
        return validate_link_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    user_id: int
    title: str
    description: str | None
    link: str
    created_at: datetime
    updated_at: datetime
