"""Pydantic schemas for user and authentication API endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from game_catalog.utils.security import MAX_PASSWORD_BYTES


class LoginCredentials(BaseModel):
    """Schema for login requests.

    Only presence is checked here; every wrong value fails the same way
    during verification.
    """

    username: str = Field(description="Username")
    password: str = Field(description="Password")


class UserCredentials(BaseModel):
    """Schema for registration requests.

    Blank values pass through so registration reports them as missing.
    """

    username: str = Field(max_length=50, description="Username")
    password: str = Field(description="Password")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Reject passwords bcrypt cannot hash in full."""
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class UserResponse(BaseModel):
    """Response schema for user data (excludes password)."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="User ID")
    username: str = Field(description="Username")


class Token(BaseModel):
    """Schema for login response."""

    token: str = Field(description="JWT bearer token")


class MessageResponse(BaseModel):
    """Schema for responses that only carry a human-readable message."""

    message: str = Field(description="Human-readable message")
