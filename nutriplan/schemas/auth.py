"""
NutriPlan API - Authentication Schemas.

Request bodies and token payloads for ``/auth``.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ConfigDict


class RegisterRequest(BaseModel):
    """
    New account.

    The password policy is enforced in the route, not here, so a weak
    password is answered with 400 instead of a 422 validation error.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"email": "sam@nutriplan.app", "password": "Broccoli42", "name": "Sam"}
        }
    )

    email: EmailStr
    password: str
    name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "sam@nutriplan.app", "password": "Broccoli42"}}
    )

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """Issued on register, login and refresh. Both tokens are rotated together."""

    user_id: str
    email: str
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token from a previous TokenResponse")


class MeResponse(BaseModel):
    """Basic record of the authenticated user."""

    user_id: str
    email: str
    name: str
    profile_completed: bool
    created_at: Optional[datetime] = None
