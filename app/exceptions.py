# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response has the shape {"error": str, "code": str, ...}.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.identity import IdentityProviderError
from lib.kv_store import KVStoreError

logger = logging.getLogger(__name__)


class MarketDirectoryException(Exception):
    """
    Base exception for the Market Directory API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "MARKET_DIRECTORY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthenticatedError(MarketDirectoryException):
    """Raised when a route needs a user and the bearer token is missing or invalid."""

    def __init__(self, message: str = "Unauthorized. Please log in."):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
            suggestion="Send 'Authorization: Bearer <access token>' for a signed-in user",
        )


class ForbiddenError(MarketDirectoryException):
    """Raised when the caller is authenticated but does not own the entity."""

    def __init__(self, entity_plural: str, action: str):
        super().__init__(
            message=f"Unauthorized: You can only {action} your own {entity_plural}",
            code="FORBIDDEN",
            status_code=403,
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class InvalidInputError(MarketDirectoryException):
    """Raised when required fields are missing or out of range."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            status_code=400,
            details=details,
        )


class NotFoundError(MarketDirectoryException):
    """Raised when an entity id doesn't exist."""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            message=f"{entity_type.capitalize()} not found",
            code="NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {entity_type} id is correct and it hasn't been deleted",
            details={"id": entity_id},
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamFailureError(MarketDirectoryException):
    """Raised when the store or the identity provider fails unexpectedly."""

    def __init__(self, message: str = "An upstream service failed"):
        super().__init__(
            message=message,
            code="UPSTREAM_FAILURE",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def market_directory_exception_handler(
    request: Request,
    exc: MarketDirectoryException
) -> JSONResponse:
    """
    Convert MarketDirectoryException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request schema violations as 400 InvalidInput.

    Reports the first problem in readable form, e.g.
    "rating: Input should be less than or equal to 5".
    """
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        text = str(first.get("msg", "")).removeprefix("Value error, ")
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {text}" if field else text

    error = InvalidInputError(message, details={"errors": len(errors)})
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def identity_provider_exception_handler(
    request: Request,
    exc: IdentityProviderError
) -> JSONResponse:
    """
    Surface provider validation messages, hide provider outages.

    "User already registered" is shown as-is with 400; a network failure
    becomes a generic 500.
    """
    if exc.user_facing:
        error: MarketDirectoryException = InvalidInputError(exc.message)
    else:
        error = UpstreamFailureError("Identity provider unavailable")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def kv_store_exception_handler(
    request: Request,
    exc: KVStoreError
) -> JSONResponse:
    """Report store failures without leaking backend details."""
    logger.error(f"Store failure on {request.method} {request.url.path}: {exc}")
    error = UpstreamFailureError("Storage operation failed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())
