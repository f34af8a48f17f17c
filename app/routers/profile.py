# =============================================================================
# app/routers/profile.py - Profile Endpoints
# =============================================================================
# The profile is the caller's identity as the identity provider knows it.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from app.dependencies import ProfileServiceDep
from core.models.profile import ProfileUpdate
from core.services.profile_service import to_profile

router = APIRouter()


@router.get("")
async def get_profile(user: AuthUser = Depends(get_current_user)):
    """Get the caller's profile."""
    return {"profile": to_profile(user)}


@router.put("")
async def update_profile(
    request: ProfileUpdate,
    profiles: ProfileServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update the caller's name, email and/or password.

    After an email change the client should sign in again.

    Raises:
        400: If nothing changes, or the provider rejects the change
             (weak password, email already in use)
    """
    return {"profile": profiles.update(user, request)}
