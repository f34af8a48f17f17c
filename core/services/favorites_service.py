# =============================================================================
# core/services/favorites_service.py - Favorites Business Logic
# =============================================================================
# Each user has one favorites document (key "favorites:<user_id>") with two
# id-keyed sets: markets and vendors. Adds and removes are idempotent and
# run as atomic store mutations, so concurrent requests from the same user
# cannot drop each other's changes.
# =============================================================================

import logging
from typing import Any

from core.models.favorites import FavoriteItem, Favorites, FavoriteType
from lib.identity import AuthUser
from lib.kv_store import KVStore
from lib.utils import entity_key, utc_now_iso

logger = logging.getLogger(__name__)


class FavoritesService:
    """Service for per-user favorites."""

    def __init__(self, store: KVStore):
        self.store = store

    @staticmethod
    def key(user: AuthUser) -> str:
        return entity_key("favorites", user.id)

    def get(self, user: AuthUser) -> dict[str, Any]:
        """
        Read the user's favorites.

        A missing or malformed document reads as empty lists. The repaired
        shape is returned but not written back.
        """
        favorites = Favorites.normalize(self.store.get(self.key(user)))
        logger.debug(
            f"Fetched favorites for user {user.id}: "
            f"{len(favorites.markets)} markets, {len(favorites.vendors)} vendors"
        )
        return favorites.model_dump()

    def add(
        self,
        user: AuthUser,
        favorite_type: FavoriteType,
        target_id: str,
        target_name: str,
    ) -> dict[str, Any]:
        """
        Add a market or vendor to the user's favorites.

        Adding an id that is already present changes nothing.

        Returns:
            The favorites document after the call
        """
        def mutator(current: Any) -> dict[str, Any]:
            favorites = Favorites.normalize(current)
            if favorites.contains(favorite_type, target_id):
                logger.info(f"{favorite_type.value} {target_id} already in favorites of {user.id}")
            else:
                item = FavoriteItem(id=target_id, name=target_name, added_at=utc_now_iso())
                favorites.items_for(favorite_type).append(item.model_dump())
                logger.info(f"Added {favorite_type.value} {target_id} to favorites of {user.id}")
            return favorites.model_dump()

        return self.store.mutate(self.key(user), mutator)

    def remove(self, user: AuthUser, favorite_type: FavoriteType, target_id: str) -> dict[str, Any]:
        """
        Remove a market or vendor from the user's favorites.

        Removing an id that is not present is a successful no-op.
        """
        def mutator(current: Any) -> dict[str, Any]:
            favorites = Favorites.normalize(current)
            items = favorites.items_for(favorite_type)
            remaining = [item for item in items if item.get("id") != target_id]
            setattr(favorites, favorite_type.list_name, remaining)
            logger.info(
                f"Removed {favorite_type.value} {target_id} from favorites of {user.id} "
                f"({len(items)} -> {len(remaining)})"
            )
            return favorites.model_dump()

        return self.store.mutate(self.key(user), mutator)
