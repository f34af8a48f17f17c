# =============================================================================
# app/routers/markets.py - Market CRUD Endpoints
# =============================================================================
# Reads are public. Creating needs a signed-in user; editing and deleting
# need the user who created the market. Deleting a market also deletes its
# itineraries.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from app.dependencies import MarketServiceDep
from core.models.market import MarketCreate, MarketUpdate

router = APIRouter()

MarketId = Annotated[str, Path(description="Market id")]


@router.get("")
async def list_markets(markets: MarketServiceDep):
    """List every market, newest first."""
    return {"markets": markets.list()}


@router.get("/my")
async def list_my_markets(
    markets: MarketServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    List the markets registered by the caller.

    Backs the "manage my markets" page.
    """
    return {"markets": markets.list_owned_by(user)}


@router.get("/{market_id}")
async def get_market(market_id: MarketId, markets: MarketServiceDep):
    """Get one market."""
    return {"market": markets.get(market_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_market(
    request: MarketCreate,
    markets: MarketServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Register a market.

    New markets start with is_verified = false.
    """
    return {"market": markets.create(request, user)}


@router.put("/{market_id}")
async def update_market(
    market_id: MarketId,
    request: MarketUpdate,
    markets: MarketServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update a market.

    Only fields present in the body change. User must own the market.
    """
    return {"market": markets.update(market_id, request.changes(), user)}


@router.delete("/{market_id}")
async def delete_market(
    market_id: MarketId,
    markets: MarketServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete a market and its itineraries.

    Vendors and reviews that reference the market are kept.
    User must own the market.
    """
    markets.delete(market_id, user)
    return {"success": True, "message": "Market deleted successfully"}
