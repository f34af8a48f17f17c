# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# The store and identity provider are built once by create_app() and kept on
# app.state; these functions hand them (or services wrapping them) to route
# handlers via Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services import (
    FavoritesService,
    ItineraryService,
    MarketService,
    ProfileService,
    ReviewService,
    VendorService,
)
from lib.identity import IdentityProvider
from lib.kv_store import KVStore


def get_store(request: Request) -> KVStore:
    """Key-value store of this process."""
    return request.app.state.store


def get_identity(request: Request) -> IdentityProvider:
    """Identity provider of this process."""
    return request.app.state.identity


# Type aliases for dependency injection
StoreDep = Annotated[KVStore, Depends(get_store)]
IdentityDep = Annotated[IdentityProvider, Depends(get_identity)]


def get_market_service(store: StoreDep) -> MarketService:
    return MarketService(store)


def get_vendor_service(store: StoreDep) -> VendorService:
    return VendorService(store)


def get_itinerary_service(store: StoreDep) -> ItineraryService:
    return ItineraryService(store)


def get_review_service(store: StoreDep) -> ReviewService:
    return ReviewService(store, avatar_base_url=settings.AVATAR_BASE_URL)


def get_favorites_service(store: StoreDep) -> FavoritesService:
    return FavoritesService(store)


def get_profile_service(identity: IdentityDep) -> ProfileService:
    return ProfileService(identity)


MarketServiceDep = Annotated[MarketService, Depends(get_market_service)]
VendorServiceDep = Annotated[VendorService, Depends(get_vendor_service)]
ItineraryServiceDep = Annotated[ItineraryService, Depends(get_itinerary_service)]
ReviewServiceDep = Annotated[ReviewService, Depends(get_review_service)]
FavoritesServiceDep = Annotated[FavoritesService, Depends(get_favorites_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
