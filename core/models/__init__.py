# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - base.py: Request base classes (unknown fields rejected, partial updates)
# - market.py / vendor.py / itinerary.py: Owned directory entities
# - review.py: Reviews with a closed rating range
# - favorites.py: Per-user favorites document
# - profile.py: Signup and profile payloads
#
# These models define the "contract" between API and clients.
# =============================================================================

from .base import RequestModel, UpdateModel

# -----------------------------------------------------------------------------
# Directory entities
# -----------------------------------------------------------------------------
from .market import Market, MarketCreate, MarketUpdate
from .vendor import Vendor, VendorCreate, VendorUpdate
from .itinerary import Itinerary, ItineraryCreate, ItineraryStop, ItineraryUpdate

# -----------------------------------------------------------------------------
# Reviews
# -----------------------------------------------------------------------------
from .review import MAX_RATING, MIN_RATING, Review, ReviewCreate, ReviewType, ReviewUpdate

# -----------------------------------------------------------------------------
# Favorites
# -----------------------------------------------------------------------------
from .favorites import FavoriteAdd, FavoriteItem, Favorites, FavoriteType

# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------
from .profile import AccountUser, Profile, ProfileUpdate, SignupRequest, SignupResponse

__all__ = [
    # Base
    "RequestModel",
    "UpdateModel",
    # Markets
    "Market",
    "MarketCreate",
    "MarketUpdate",
    # Vendors
    "Vendor",
    "VendorCreate",
    "VendorUpdate",
    # Itineraries
    "Itinerary",
    "ItineraryCreate",
    "ItineraryStop",
    "ItineraryUpdate",
    # Reviews
    "MAX_RATING",
    "MIN_RATING",
    "Review",
    "ReviewCreate",
    "ReviewType",
    "ReviewUpdate",
    # Favorites
    "FavoriteAdd",
    "FavoriteItem",
    "Favorites",
    "FavoriteType",
    # Accounts
    "AccountUser",
    "Profile",
    "ProfileUpdate",
    "SignupRequest",
    "SignupResponse",
]
