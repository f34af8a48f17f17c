# =============================================================================
# app/routers/favorites.py - Favorites Endpoints
# =============================================================================
# All endpoints require authentication and only ever touch the caller's own
# favorites document.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user
from app.dependencies import FavoritesServiceDep
from core.models.favorites import FavoriteAdd, FavoriteType

router = APIRouter()


@router.get("")
async def get_favorites(
    favorites: FavoritesServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Get the caller's favorite markets and vendors."""
    return {"favorites": favorites.get(user)}


@router.post("")
async def add_favorite(
    request: FavoriteAdd,
    favorites: FavoritesServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Add a market or vendor to favorites.

    Adding something that is already a favorite succeeds without
    creating a duplicate.
    """
    return {
        "favorites": favorites.add(user, request.type, request.target_id, request.target_name)
    }


@router.delete("/{favorite_type}/{target_id}")
async def remove_favorite(
    favorite_type: Annotated[FavoriteType, Path(description="market or vendor")],
    target_id: Annotated[str, Path(description="Id of the market or vendor")],
    favorites: FavoritesServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Remove a market or vendor from favorites.

    Removing something that is not a favorite succeeds and changes nothing.
    """
    return {"favorites": favorites.remove(user, favorite_type, target_id)}
