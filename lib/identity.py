# =============================================================================
# lib/identity.py - Identity Provider Bridge
# =============================================================================
# Credentials and sessions belong to an external identity provider
# (Supabase Auth). This module is the only place that talks to it:
# - verify(token): bearer token -> AuthUser, or None on any failure
# - sign_up(name, email, password): admin-confirmed account + immediate sign-in
# - update_user(user_id, ...): administrative profile update
#
# Provider failures are wrapped in IdentityProviderError. Errors the provider
# reports about the request itself (4xx: duplicate email, weak password) are
# flagged user_facing so the API can show their message verbatim; anything
# else (network, 5xx) is reported generically.
# =============================================================================

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


class AuthUser(BaseModel):
    """
    Authenticated user (the request principal).

    Built from the identity provider's user record; there is no separate
    profile table.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: str | None = None
    name: str | None = None
    created_at: str | None = None

    @property
    def display_name(self) -> str:
        """Name shown on content the user creates, falling back to email."""
        return self.name or self.email or ""


class SignupResult(BaseModel):
    """New account plus the session minted right after creating it."""
    user: AuthUser
    session: dict[str, Any]


class IdentityProviderError(Exception):
    """
    Error returned by, or while reaching, the identity provider.

    Attributes:
        message: Provider message (safe to show when user_facing)
        user_facing: True when the provider rejected the request itself
    """

    def __init__(self, message: str, user_facing: bool = False):
        super().__init__(message)
        self.message = message
        self.user_facing = user_facing


class IdentityProvider(ABC):
    """Operations the API needs from the identity provider."""

    @abstractmethod
    def verify(self, token: str) -> AuthUser | None:
        """Resolve a bearer token to a user, or None if it is not valid."""

    @abstractmethod
    def sign_up(self, name: str, email: str, password: str) -> SignupResult:
        """Create a pre-confirmed account and sign it in."""

    @abstractmethod
    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> AuthUser:
        """Update identity attributes of an existing user."""


def _wrap_provider_error(action: str, exc: Exception) -> IdentityProviderError:
    """
    Classify an SDK exception.

    Supabase auth API errors carry an HTTP status; 4xx means the provider
    rejected the request and its message is meant for the user.
    """
    status = getattr(exc, "status", None)
    message = getattr(exc, "message", None) or str(exc)
    user_facing = isinstance(status, int) and 400 <= status < 500
    if user_facing:
        logger.info(f"Identity provider rejected {action}: {message}")
    else:
        logger.error(f"Identity provider failure during {action}: {exc}")
    return IdentityProviderError(message, user_facing=user_facing)


def _to_auth_user(user: Any) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    created_at = getattr(user, "created_at", None)
    if isinstance(created_at, datetime):
        created_at = created_at.isoformat()
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        name=metadata.get("name"),
        created_at=created_at,
    )


def _session_to_dict(session: Any) -> dict[str, Any]:
    if session is None:
        return {}
    if hasattr(session, "model_dump"):
        return session.model_dump(mode="json")
    return dict(session)


class SupabaseIdentityProvider(IdentityProvider):
    """
    Identity provider backed by Supabase Auth.

    Example:
        identity = SupabaseIdentityProvider(SupabaseClient(url, anon, service))
        user = identity.verify(token)
    """

    def __init__(self, supabase: SupabaseClient):
        self._supabase = supabase

    def verify(self, token: str) -> AuthUser | None:
        if not token:
            return None
        try:
            response = self._supabase.public.auth.get_user(token)
        except Exception as e:
            logger.warning(f"Auth verification error: {e}")
            return None

        user = getattr(response, "user", None)
        if user is None:
            logger.warning("Auth verification returned no user")
            return None
        return _to_auth_user(user)

    def sign_up(self, name: str, email: str, password: str) -> SignupResult:
        try:
            self._supabase.admin.auth.admin.create_user({
                "email": email,
                "password": password,
                # No email server: accounts are confirmed on creation
                "email_confirm": True,
                "user_metadata": {"name": name},
            })
        except Exception as e:
            raise _wrap_provider_error("signup", e)

        try:
            client = self._supabase.new_public_client()
            response = client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise _wrap_provider_error("sign-in after signup", e)

        logger.info(f"Created account for {email}")
        return SignupResult(
            user=_to_auth_user(response.user),
            session=_session_to_dict(response.session),
        )

    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> AuthUser:
        attributes: dict[str, Any] = {}
        if name:
            attributes["user_metadata"] = {"name": name}
        if email:
            attributes["email"] = email
        if password:
            attributes["password"] = password

        try:
            response = self._supabase.admin.auth.admin.update_user_by_id(user_id, attributes)
        except Exception as e:
            raise _wrap_provider_error("profile update", e)

        logger.info(f"Updated identity attributes {sorted(attributes)} for user {user_id}")
        return _to_auth_user(response.user)
