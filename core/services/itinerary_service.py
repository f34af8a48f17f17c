# =============================================================================
# core/services/itinerary_service.py - Itinerary Business Logic
# =============================================================================

import logging
from typing import Any

from core.models.itinerary import Itinerary, ItineraryCreate
from core.services.entity_service import OwnedEntityService
from lib.identity import AuthUser
from lib.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)


class ItineraryService(OwnedEntityService):
    """Itineraries: routes through one market, owned by their author."""

    entity_type = "itinerary"
    entity_plural = "itineraries"

    def list_for_market(self, market_id: str | None = None) -> list[dict[str, Any]]:
        return self.list(market_id=market_id)

    def create(self, payload: ItineraryCreate, user: AuthUser) -> dict[str, Any]:
        now = utc_now_iso()
        itinerary = Itinerary(
            id=new_id(),
            market_id=payload.market_id,
            title=payload.title,
            description=payload.description,
            duration=payload.duration,
            stops=[stop.model_dump() for stop in payload.stops],
            created_by_user_id=user.id,
            created_by_name=user.display_name,
            created_at=now,
            updated_at=now,
        )
        return self.save_new(itinerary.model_dump(mode="json"))

    def delete_for_market(self, market_id: str) -> int:
        """
        Delete every itinerary of a market.

        Returns:
            Number of itineraries removed
        """
        keys = [
            self.key(itinerary["id"])
            for itinerary in self.list(market_id=market_id)
            if itinerary.get("id")
        ]
        self.store.delete_many(keys)
        if keys:
            logger.info(f"Deleted {len(keys)} itineraries of market {market_id}")
        return len(keys)
