# =============================================================================
# core/services/entity_service.py - Owned Entity CRUD
# =============================================================================
# Shared business logic for documents that belong to the user who created
# them (markets, vendors, itineraries, reviews):
# - list with an optional equality filter, newest first
# - get by id (NotFound if absent)
# - create with ownership stamping
# - owner-gated partial update and delete
#
# Concrete services declare the key prefix, owner field and how to build a
# new document. Separates HTTP concerns from store/business logic.
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable

from app.exceptions import ForbiddenError, NotFoundError
from lib.identity import AuthUser
from lib.kv_store import KVStore
from lib.utils import entity_key, newest_first, utc_now_iso

logger = logging.getLogger(__name__)


class OwnedEntityService:
    """
    CRUD over one entity type in the key-value store.

    Subclasses set:
        entity_type: Key prefix and name used in messages ("market")
        entity_plural: Plural used in messages ("markets")
        owner_field: Field holding the creator's user id
        sort_field: Timestamp used to order lists
    """

    entity_type: str = "entity"
    entity_plural: str = "entities"
    owner_field: str = "created_by_user_id"
    sort_field: str = "created_at"
    updated_field: str = "updated_at"

    def __init__(self, store: KVStore):
        self.store = store

    # -------------------------------------------------------------------------
    # Keys
    # -------------------------------------------------------------------------

    def key(self, entity_id: str) -> str:
        return entity_key(self.entity_type, entity_id)

    @property
    def prefix(self) -> str:
        return f"{self.entity_type}:"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list(self, **filters: str | None) -> list[dict[str, Any]]:
        """
        List all documents of this type, newest first.

        Filters with a None value are ignored; the rest must match exactly.

        Example:
            vendors = service.list(market_id="550e8400-...")
        """
        documents = [doc for doc in self.store.get_by_prefix(self.prefix) if isinstance(doc, dict)]
        active = {field: value for field, value in filters.items() if value is not None}
        if active:
            documents = [
                doc for doc in documents
                if all(doc.get(field) == value for field, value in active.items())
            ]
        logger.debug(f"Listed {len(documents)} {self.entity_plural} (filters={active})")
        return newest_first(documents, self.sort_field)

    def get(self, entity_id: str) -> dict[str, Any]:
        """
        Get one document.

        Raises:
            NotFoundError: If the id doesn't exist
        """
        document = self.store.get(self.key(entity_id))
        if not document:
            raise NotFoundError(self.entity_type, entity_id)
        return document

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def save_new(self, document: dict[str, Any]) -> dict[str, Any]:
        """Persist a freshly built document under its id."""
        self.store.set(self.key(document["id"]), document)
        logger.info(
            f"Created {self.entity_type} {document['id']} "
            f"for user {document.get(self.owner_field)}"
        )
        return document

    def check_owner(self, document: dict[str, Any], user: AuthUser, action: str) -> None:
        """
        Raises:
            ForbiddenError: If user did not create the document
        """
        if document.get(self.owner_field) != user.id:
            logger.warning(
                f"User {user.id} tried to {action} {self.entity_type} "
                f"{document.get('id')} owned by {document.get(self.owner_field)}"
            )
            raise ForbiddenError(self.entity_plural, action)

    def update(
        self,
        entity_id: str,
        changes: dict[str, Any],
        user: AuthUser,
        guard: Callable[[dict[str, Any]], None] | None = None,
    ) -> dict[str, Any]:
        """
        Owner-gated partial update.

        Runs as one atomic store mutation so the ownership check and the
        merge see the same version of the document. guard, if given, can
        veto the change by raising after the ownership check.

        Raises:
            NotFoundError: If the id doesn't exist
            ForbiddenError: If user is not the owner
        """
        def mutator(current: Any) -> dict[str, Any]:
            if not current:
                raise NotFoundError(self.entity_type, entity_id)
            self.check_owner(current, user, "edit")
            if guard is not None:
                guard(current)
            current.update(changes)
            current[self.updated_field] = utc_now_iso()
            return current

        document = self.store.mutate(self.key(entity_id), mutator)
        logger.info(f"Updated {self.entity_type} {entity_id} fields={sorted(changes)}")
        return document

    def before_delete(self, document: dict[str, Any]) -> None:
        """Hook for cascades; runs after the ownership check."""

    def delete(self, entity_id: str, user: AuthUser) -> None:
        """
        Owner-gated permanent delete.

        Runs under the same per-key lock as update(), so an edit in flight
        cannot write the document back after it is gone.

        Raises:
            NotFoundError: If the id doesn't exist
            ForbiddenError: If user is not the owner
        """
        def check(current: Any) -> None:
            if not current:
                raise NotFoundError(self.entity_type, entity_id)
            self.check_owner(current, user, "delete")
            self.before_delete(current)

        self.store.pop(self.key(entity_id), check)
        logger.info(f"Deleted {self.entity_type} {entity_id}")
