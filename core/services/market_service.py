# =============================================================================
# core/services/market_service.py - Market Business Logic
# =============================================================================
# Markets are owned by the user who registered them. Deleting a market also
# deletes its itineraries. Vendors and reviews that point at the market are
# left in place.
# =============================================================================

import logging
from typing import Any

from core.models.market import Market, MarketCreate
from core.services.entity_service import OwnedEntityService
from core.services.itinerary_service import ItineraryService
from lib.identity import AuthUser
from lib.kv_store import KVStore
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)


class MarketService(OwnedEntityService):
    """Service for market management operations."""

    entity_type = "market"
    entity_plural = "markets"

    def __init__(self, store: KVStore):
        super().__init__(store)
        self.itineraries = ItineraryService(store)

    def list_owned_by(self, user: AuthUser) -> list[dict[str, Any]]:
        """Markets registered by user, newest first."""
        return self.list(created_by_user_id=user.id)

    def create(self, payload: MarketCreate, user: AuthUser) -> dict[str, Any]:
        """
        Register a new, unverified market owned by user.

        Args:
            payload: Validated market fields
            user: The creator

        Returns:
            The stored market document
        """
        now = utc_now_iso()
        market = Market(
            id=new_id(),
            **payload.model_dump(),
            created_by_user_id=user.id,
            created_by_name=user.display_name,
            is_verified=False,
            created_at=now,
            updated_at=now,
        )
        return self.save_new(market.model_dump(mode="json"))

    def before_delete(self, document: dict[str, Any]) -> None:
        removed = self.itineraries.delete_for_market(document["id"])
        logger.debug(f"Market {document['id']} cascade removed {removed} itineraries")
