# =============================================================================
# core/services/vendor_service.py - Vendor Business Logic
# =============================================================================

from typing import Any

from core.models.vendor import Vendor, VendorCreate
from core.services.entity_service import OwnedEntityService
from lib.identity import AuthUser
from lib.utils import new_id, utc_now_iso


class VendorService(OwnedEntityService):
    """Vendors: stalls inside a market, owned by whoever registered them."""

    entity_type = "vendor"
    entity_plural = "vendors"

    def list_for_market(self, market_id: str | None = None) -> list[dict[str, Any]]:
        return self.list(market_id=market_id)

    def create(self, payload: VendorCreate, user: AuthUser) -> dict[str, Any]:
        now = utc_now_iso()
        vendor = Vendor(
            id=new_id(),
            **payload.model_dump(),
            created_by_user_id=user.id,
            created_by_name=user.display_name,
            is_verified=False,
            created_at=now,
            updated_at=now,
        )
        return self.save_new(vendor.model_dump(mode="json"))
