# =============================================================================
# core/models/favorites.py - Favorites Schemas
# =============================================================================
# One document per user (key "favorites:<user_id>") holding two sets of
# favorited markets and vendors. Sets are stored as arrays; id is the
# uniqueness key.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .base import RequestModel


class FavoriteType(str, Enum):
    """Kinds of things a user can favorite."""
    MARKET = "market"
    VENDOR = "vendor"

    @property
    def list_name(self) -> str:
        """Name of the list in the favorites document ("markets"/"vendors")."""
        return f"{self.value}s"


class FavoriteAdd(RequestModel):
    """
    Schema for adding a favorite.

    Example:
        {"type": "market", "target_id": "550e8400-...", "target_name": "Mercado Central"}
    """

    type: FavoriteType
    target_id: str = Field(..., min_length=1)
    target_name: str = Field(..., min_length=1)


class FavoriteItem(BaseModel):
    """One entry in a favorites list."""

    id: str
    name: str
    added_at: str


class Favorites(BaseModel):
    """The per-user favorites document."""

    markets: list[dict[str, Any]] = Field(default_factory=list)
    vendors: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def normalize(cls, raw: Any) -> "Favorites":
        """
        Repair whatever is stored into the expected shape.

        Missing documents, non-objects and non-list members all become
        empty lists; entries that are not objects with an id are dropped.
        """
        if not isinstance(raw, dict):
            return cls()

        def clean(items: Any) -> list[dict[str, Any]]:
            if not isinstance(items, list):
                return []
            return [item for item in items if isinstance(item, dict) and "id" in item]

        return cls(markets=clean(raw.get("markets")), vendors=clean(raw.get("vendors")))

    def items_for(self, favorite_type: FavoriteType) -> list[dict[str, Any]]:
        return getattr(self, favorite_type.list_name)

    def contains(self, favorite_type: FavoriteType, target_id: str) -> bool:
        return any(item.get("id") == target_id for item in self.items_for(favorite_type))
