# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# The request principal is defined next to the identity provider that
# produces it; it is re-exported here for route modules.
# =============================================================================

from lib.identity import AuthUser
from core.models.profile import SignupRequest, SignupResponse

__all__ = ["AuthUser", "SignupRequest", "SignupResponse"]
