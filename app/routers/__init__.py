# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - health.py: Health check endpoints
# - markets.py: Market directory CRUD
# - vendors.py: Vendor CRUD
# - reviews.py: Reviews and helpful votes
# - itineraries.py: Market itineraries CRUD
# - favorites.py: Per-user favorites
# - profile.py: Caller's profile
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import markets
from . import vendors
from . import reviews
from . import itineraries
from . import favorites
from . import profile

__all__ = [
    "health",
    "markets",
    "vendors",
    "reviews",
    "itineraries",
    "favorites",
    "profile",
]
