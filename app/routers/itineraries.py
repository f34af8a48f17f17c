# =============================================================================
# app/routers/itineraries.py - Itinerary CRUD Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.dependencies import ItineraryServiceDep
from core.models.itinerary import ItineraryCreate, ItineraryUpdate

router = APIRouter()

ItineraryId = Annotated[str, Path(description="Itinerary id")]


@router.get("")
async def list_itineraries(
    itineraries: ItineraryServiceDep,
    market: Annotated[str | None, Query(description="Only itineraries of this market id")] = None,
):
    """List itineraries, newest first."""
    return {"itineraries": itineraries.list_for_market(market)}


@router.get("/{itinerary_id}")
async def get_itinerary(itinerary_id: ItineraryId, itineraries: ItineraryServiceDep):
    """Get one itinerary."""
    return {"itinerary": itineraries.get(itinerary_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_itinerary(
    request: ItineraryCreate,
    itineraries: ItineraryServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Create an itinerary with at least one stop."""
    return {"itinerary": itineraries.create(request, user)}


@router.put("/{itinerary_id}")
async def update_itinerary(
    itinerary_id: ItineraryId,
    request: ItineraryUpdate,
    itineraries: ItineraryServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Update an itinerary. User must own it."""
    return {"itinerary": itineraries.update(itinerary_id, request.changes(), user)}


@router.delete("/{itinerary_id}")
async def delete_itinerary(
    itinerary_id: ItineraryId,
    itineraries: ItineraryServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete an itinerary. User must own it."""
    itineraries.delete(itinerary_id, user)
    return {"success": True, "message": "Itinerary deleted successfully"}
