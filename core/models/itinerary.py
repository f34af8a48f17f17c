# =============================================================================
# core/models/itinerary.py - Itinerary Schemas
# =============================================================================
# A user-written walking route through one market: an ordered list of stops.
# Itineraries are deleted together with their market.
# =============================================================================

from pydantic import BaseModel, Field

from .base import RequestModel, UpdateModel


class ItineraryStop(RequestModel):
    """One stop of an itinerary."""

    name: str = Field(..., min_length=1)
    description: str = ""
    location: str = ""


class ItineraryCreate(RequestModel):
    """
    Schema for creating an itinerary.

    Example:
        {
            "market_id": "550e8400-...",
            "title": "Breakfast tour",
            "description": "Coffee, cheese bread and fruit",
            "duration": "1h",
            "stops": [{"name": "Café do Mercado", "location": "Box 12"}]
        }
    """

    market_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    duration: str = ""
    stops: list[ItineraryStop] = Field(..., min_length=1)


class ItineraryUpdate(UpdateModel):
    """
    Partial update of an itinerary.

    The market cannot change; title and stops may not be emptied.
    """

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    duration: str | None = None
    stops: list[ItineraryStop] | None = Field(default=None, min_length=1)


class Itinerary(BaseModel):
    """Stored itinerary document."""

    id: str
    market_id: str
    title: str
    description: str
    duration: str = ""
    stops: list[dict] = Field(default_factory=list)

    created_by_user_id: str
    created_by_name: str = ""

    created_at: str
    updated_at: str
