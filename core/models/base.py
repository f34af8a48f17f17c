# =============================================================================
# core/models/base.py - Shared Schema Building Blocks
# =============================================================================
# - RequestModel: base for every request body; unknown fields are rejected
# - UpdateModel: partial-update body; knows which fields the client sent
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """
    Base class for request bodies.

    Rejects fields the route does not know about and strips surrounding
    whitespace from strings, so "   " counts as empty.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class UpdateModel(RequestModel):
    """
    Base class for partial-update bodies.

    All fields default to None. changes() returns only what the client
    actually sent: an omitted field or an explicit null keeps the stored
    value, while an empty string is a real change.
    """

    def changes(self) -> dict[str, Any]:
        # Nested models are dumped whole so their defaults are kept
        sent = self.model_dump(mode="json", include=self.model_fields_set)
        return {field: value for field, value in sent.items() if value is not None}
