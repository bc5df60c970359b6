"""Pydantic schemas for signup and login endpoints."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthRequest(BaseModel):
    """Credentials sent to /auth/signup and /auth/login."""

    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Access token returned after a successful signup or login."""

    access_token: str = Field(
        ...,
        description="Signed bearer token. Send it as 'Authorization: Bearer <token>'.",
    )
