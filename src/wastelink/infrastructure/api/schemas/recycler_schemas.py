"""Pydantic schemas for recycler account endpoints.

JSON bodies use camelCase keys to match the dashboard client.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

CAMEL_CASE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)


class RegisterRequest(BaseModel):
    """Request body for recycler registration."""

    model_config = CAMEL_CASE_CONFIG

    name: str = Field(..., min_length=1, max_length=255, description="Facility name")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., min_length=1, description="Account password")
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)


class LoginRequest(BaseModel):
    """Request body for recycler login."""

    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., min_length=1, description="Account password")


class UpdateProfileRequest(BaseModel):
    """Request body for a partial profile update. Omitted fields are kept."""

    model_config = CAMEL_CASE_CONFIG

    name: str | None = Field(None, min_length=1, max_length=255)
    email: EmailStr | None = None
    address: str | None = Field(None, min_length=1, max_length=255)
    city: str | None = Field(None, min_length=1, max_length=100)
    state: str | None = Field(None, min_length=1, max_length=100)
    zip_code: str | None = Field(None, min_length=1, max_length=20)


class RecyclerResponse(BaseModel):
    """Recycler information returned to the client. Never includes the password hash."""

    model_config = CAMEL_CASE_CONFIG

    id: str
    name: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str
    created_at: datetime | None = None


class AuthResponse(BaseModel):
    """Response for successful registration or login."""

    message: str
    token: str = Field(..., description="JWT access token, also set as a cookie")
    recycler: RecyclerResponse


class ProfileResponse(BaseModel):
    """Response for a profile update."""

    message: str
    recycler: RecyclerResponse


class MessageResponse(BaseModel):
    """Plain message response."""

    message: str
