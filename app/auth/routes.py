# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account creation.
#
# Note: Login and token refresh are handled by the Supabase Auth client SDK
# on the frontend. The backend only creates accounts, because creation needs
# the service_role key to skip email confirmation.
# =============================================================================

from fastapi import APIRouter

from app.auth.models import SignupRequest, SignupResponse
from app.dependencies import ProfileServiceDep

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=SignupResponse)
async def signup(request: SignupRequest, profiles: ProfileServiceDep) -> SignupResponse:
    """
    Create an account and sign it in.

    The email is confirmed on creation (no verification mail). The response
    carries a session whose access_token can be used right away.

    Raises:
        400: If a field is missing or the provider rejects the account
             (e.g. email already registered)
    """
    return profiles.sign_up(request)
