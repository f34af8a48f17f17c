# =============================================================================
# core/models/market.py - Market Schemas
# =============================================================================
# These models define the API contract for market operations:
# - MarketCreate: Input for registering a new market
# - MarketUpdate: Partial update sent by the market's owner
# - Market: The stored document (key "market:<id>")
#
# Markets are created by signed-in users and start unverified.
# =============================================================================

from pydantic import BaseModel, Field

from .base import RequestModel, UpdateModel


class MarketCreate(RequestModel):
    """
    Schema for creating a market.

    Example:
        {
            "name": "Mercado Central",
            "description": "Covered market with 200 stalls",
            "address": "Rua do Mercado, 1",
            "hours": "Mon-Sat 7h-18h",
            "photos": ["https://.../front.jpg"]
        }
    """

    # Required identity of the market
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)

    # Optional contact and listing details
    phone: str = ""
    hours: str = ""
    category: str = ""
    products: str = Field(default="", description="Free-text list of what is sold")
    website: str = ""
    instagram: str = ""
    facebook: str = ""
    photos: list[str] = Field(default_factory=list)


class MarketUpdate(UpdateModel):
    """
    Schema for updating a market.

    Only fields present in the body change. Sending "" clears a field.
    The name may not be cleared.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    address: str | None = None
    phone: str | None = None
    hours: str | None = None
    category: str | None = None
    products: str | None = None
    website: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    photos: list[str] | None = None


class Market(BaseModel):
    """Stored market document."""

    id: str
    name: str
    description: str
    address: str
    phone: str = ""
    hours: str = ""
    category: str = ""
    products: str = ""
    website: str = ""
    instagram: str = ""
    facebook: str = ""
    photos: list[str] = Field(default_factory=list)

    # Ownership and moderation
    created_by_user_id: str
    created_by_name: str = ""
    is_verified: bool = False

    created_at: str
    updated_at: str
