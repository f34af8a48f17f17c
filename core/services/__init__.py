# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .entity_service import OwnedEntityService
from .market_service import MarketService
from .vendor_service import VendorService
from .itinerary_service import ItineraryService
from .review_service import ReviewService
from .favorites_service import FavoritesService
from .profile_service import ProfileService

__all__ = [
    "OwnedEntityService",
    "MarketService",
    "VendorService",
    "ItineraryService",
    "ReviewService",
    "FavoritesService",
    "ProfileService",
]
