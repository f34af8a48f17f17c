# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


# =============================================================================
# ID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def new_id() -> str:
    """Generate a fresh entity id."""
    return str(uuid4())


def entity_key(prefix: str, entity_id: str | UUID) -> str:
    """
    Build a store key of the form "<prefix>:<id>".

    Example:
        entity_key("market", "550e8400-...")  # "market:550e8400-..."
    """
    return f"{prefix}:{normalize_uuid(entity_id)}"


# =============================================================================
# Timestamp Utilities
# =============================================================================

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an ISO-8601 timestamp leniently.

    Accepts the trailing "Z" written by JavaScript clients. Missing or
    unparseable values map to the oldest representable time so they sort last.
    """
    if not isinstance(value, str) or not value:
        return _OLDEST
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _OLDEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def newest_first(items: list[dict[str, Any]], field: str = "created_at") -> list[dict[str, Any]]:
    """Sort documents by a timestamp field, newest first."""
    return sorted(items, key=lambda item: parse_timestamp(item.get(field)), reverse=True)


# =============================================================================
# Presentation Helpers
# =============================================================================

def avatar_url(base_url: str, seed: str) -> str:
    """
    Deterministic avatar URL for a user.

    The same seed always yields the same URL, so reviews by one user share
    an avatar without storing anything extra.
    """
    return f"{base_url}?seed={seed}"
