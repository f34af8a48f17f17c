# =============================================================================
# core/models/vendor.py - Vendor Schemas
# =============================================================================
# A vendor is a stall or shop inside a market. vendor.market_id is not
# checked against existing markets.
# =============================================================================

from pydantic import BaseModel, Field

from .base import RequestModel, UpdateModel


class VendorCreate(RequestModel):
    """
    Schema for registering a vendor.

    Example:
        {
            "name": "Banca do Zé",
            "specialty": "Cheeses",
            "market_id": "550e8400-...",
            "market_name": "Mercado Central",
            "products": ["Queijo minas", "Requeijão"]
        }
    """

    name: str = Field(..., min_length=1, max_length=200)
    specialty: str = Field(..., min_length=1)
    market_id: str = Field(..., min_length=1)

    market_name: str = ""
    location: str = Field(default="", description="Stall number or aisle inside the market")
    phone: str = ""
    whatsapp: str = ""
    instagram: str = ""
    description: str = ""
    photo: str = ""
    products: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)


class VendorUpdate(UpdateModel):
    """Partial update of a vendor; name and specialty may not be cleared."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    specialty: str | None = Field(default=None, min_length=1)
    market_id: str | None = Field(default=None, min_length=1)
    market_name: str | None = None
    location: str | None = None
    phone: str | None = None
    whatsapp: str | None = None
    instagram: str | None = None
    description: str | None = None
    photo: str | None = None
    products: list[str] | None = None
    badges: list[str] | None = None


class Vendor(BaseModel):
    """Stored vendor document."""

    id: str
    name: str
    specialty: str
    market_id: str
    market_name: str = ""
    location: str = ""
    phone: str = ""
    whatsapp: str = ""
    instagram: str = ""
    description: str = ""
    photo: str = ""
    products: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)

    created_by_user_id: str
    created_by_name: str = ""
    is_verified: bool = False

    created_at: str
    updated_at: str
