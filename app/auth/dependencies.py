# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Tokens are not decoded locally: the identity provider (Supabase Auth)
# introspects every bearer token and returns the user it belongs to. The
# anonymous public key that clients send on public routes is simply not a
# user token, so it fails verification like any other invalid token.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.dependencies import get_identity
from app.exceptions import UnauthenticatedError
from lib.identity import AuthUser, IdentityProvider

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing headers are reported by us as 401
security_optional = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
    identity: IdentityProvider = Depends(get_identity),
) -> AuthUser:
    """
    Resolve the bearer token to the calling user.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Asks the identity provider who the token belongs to
    3. Returns the AuthUser, or fails with 401

    Raises:
        UnauthenticatedError: 401 if the token is missing or not a valid user token

    Usage:
        @router.post("/markets")
        async def create(user: AuthUser = Depends(get_current_user)):
            ...
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError()

    user = identity.verify(credentials.credentials)
    if user is None:
        logger.warning("Rejected request with an invalid or expired token")
        raise UnauthenticatedError("Unauthorized: invalid or expired token")

    logger.debug(f"Authenticated user: {user.id}")
    return user

