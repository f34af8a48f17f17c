# =============================================================================
# core/models/profile.py - Account & Profile Schemas
# =============================================================================
# Account data lives in the identity provider; these models only shape the
# requests and responses of the signup and profile endpoints.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field

from .base import RequestModel


class SignupRequest(RequestModel):
    """
    Schema for creating an account.

    Example:
        {"name": "Ana", "email": "ana@example.com", "password": "secret1"}
    """

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileUpdate(RequestModel):
    """
    Schema for editing the caller's identity.

    At least one field must carry a change; an email equal to the current
    one does not count.
    """

    name: str | None = None
    email: str | None = None
    password: str | None = None


class Profile(BaseModel):
    """Profile returned to the client."""

    id: str
    email: str | None = None
    name: str = ""
    created_at: str | None = None


class AccountUser(BaseModel):
    """User part of the signup response."""

    id: str
    email: str | None = None
    name: str | None = None


class SignupResponse(BaseModel):
    """Signup response: the new user and a ready-to-use session."""

    user: AccountUser
    session: dict[str, Any]
