# =============================================================================
# core/services/profile_service.py - Account Business Logic
# =============================================================================
# Signup and profile edits delegate to the identity provider. There is no
# local user table: the profile is whatever the provider says about the user.
# =============================================================================

import logging

from app.exceptions import InvalidInputError
from core.models.profile import AccountUser, Profile, ProfileUpdate, SignupRequest, SignupResponse
from lib.identity import AuthUser, IdentityProvider

logger = logging.getLogger(__name__)


def to_profile(user: AuthUser) -> Profile:
    """Profile view of a principal."""
    return Profile(
        id=user.id,
        email=user.email,
        name=user.name or "",
        created_at=user.created_at,
    )


class ProfileService:
    """Service for signup and profile operations."""

    def __init__(self, identity: IdentityProvider):
        self.identity = identity

    def sign_up(self, payload: SignupRequest) -> SignupResponse:
        """
        Create an account and return it with a live session.

        Raises:
            IdentityProviderError: If the provider rejects the account
        """
        result = self.identity.sign_up(payload.name, payload.email, payload.password)
        return SignupResponse(
            user=AccountUser(
                id=result.user.id,
                email=result.user.email,
                name=result.user.name,
            ),
            session=result.session,
        )

    def update(self, user: AuthUser, payload: ProfileUpdate) -> Profile:
        """
        Update name, email and/or password of the caller.

        The email is only sent when it differs from the current one.
        Changing it invalidates the client's session on the client side.

        Raises:
            InvalidInputError: If nothing would change
            IdentityProviderError: If the provider rejects the change
        """
        name = payload.name or None
        email = payload.email if payload.email and payload.email != user.email else None
        password = payload.password or None

        if not any((name, email, password)):
            raise InvalidInputError("No updates provided")

        updated = self.identity.update_user(user.id, name=name, email=email, password=password)
        return to_profile(updated)
