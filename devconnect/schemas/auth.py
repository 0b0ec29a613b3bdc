"""Auth Schemas - registration, login and current-user payloads.

Invariants:
    - RegisterRequest.password: at least 6 characters
    - Emails are normalized to lower case at the boundary
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """Public user data (password hash never included)."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime
