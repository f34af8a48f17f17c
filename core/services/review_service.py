# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================
# Reviews are owned by user_id rather than created_by_user_id, ordered by
# their "date" and carry a per-user "helpful" vote set.
# =============================================================================

import logging
from typing import Any

from app.exceptions import InvalidInputError, NotFoundError
from core.models.review import Review, ReviewCreate, ReviewType, ReviewUpdate
from core.services.entity_service import OwnedEntityService
from lib.identity import AuthUser
from lib.kv_store import KVStore
from lib.utils import avatar_url, new_id, utc_now_iso

logger = logging.getLogger(__name__)

# Fields fixed at creation; an edit may echo them but not change them
IMMUTABLE_FIELDS = ("review_type", "market", "vendor_id")


class ReviewService(OwnedEntityService):
    """Service for review operations."""

    entity_type = "review"
    entity_plural = "reviews"
    owner_field = "user_id"
    sort_field = "date"
    updated_field = "updatedAt"

    def __init__(self, store: KVStore, avatar_base_url: str):
        super().__init__(store)
        self.avatar_base_url = avatar_base_url

    def list_reviews(
        self,
        market: str | None = None,
        vendor_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """Reviews newest first, optionally for one market and/or one vendor."""
        return self.list(market=market, vendor_id=vendor_id)

    def create(self, payload: ReviewCreate, user: AuthUser) -> dict[str, Any]:
        """
        Create a review by user.

        The payload model already enforces the rating range and the
        market/vendor requirement for the chosen review_type.
        """
        review = Review(
            id=new_id(),
            user_id=user.id,
            author=user.display_name,
            authorAvatar=avatar_url(self.avatar_base_url, user.id),
            market=payload.market or "",
            rating=payload.rating,
            comment=payload.comment,
            photos=payload.photos,
            date=utc_now_iso(),
            helpful=0,
            helpfulBy=[],
            review_type=payload.review_type,
            vendor_id=payload.vendor_id or None,
            vendor_name=payload.vendor_name or None,
        )
        return self.save_new(review.model_dump(mode="json"))

    def edit(self, review_id: str, payload: ReviewUpdate, user: AuthUser) -> dict[str, Any]:
        """
        Owner edit of rating, comment and photos.

        Raises:
            NotFoundError, ForbiddenError: As for any owned entity
            InvalidInputError: If the edit tries to retarget the review
        """
        changes: dict[str, Any] = {"rating": payload.rating, "comment": payload.comment}
        if payload.photos is not None:
            changes["photos"] = payload.photos

        sent = payload.model_dump(mode="json", include=set(IMMUTABLE_FIELDS), exclude_none=True)

        def keep_target(current: dict[str, Any]) -> None:
            stored = {
                "review_type": current.get("review_type") or ReviewType.MARKET.value,
                "market": current.get("market") or "",
                "vendor_id": current.get("vendor_id"),
            }
            for field, value in sent.items():
                if value != stored[field]:
                    raise InvalidInputError(
                        f"{field} cannot be changed after a review is created",
                        details={"field": field},
                    )

        return self.update(review_id, changes, user, guard=keep_target)

    def toggle_helpful(self, review_id: str, user: AuthUser) -> dict[str, Any]:
        """
        Flip the caller's "helpful" vote on a review.

        Runs as one atomic store mutation. The count is recomputed from the
        voter list, so helpful == len(helpfulBy) always holds afterwards.

        Raises:
            NotFoundError: If the review doesn't exist
        """
        def mutator(current: Any) -> dict[str, Any]:
            if not current:
                raise NotFoundError(self.entity_type, review_id)
            voters = [voter for voter in current.get("helpfulBy") or [] if isinstance(voter, str)]
            # Deduplicate while keeping vote order
            voters = list(dict.fromkeys(voters))
            if user.id in voters:
                voters.remove(user.id)
            else:
                voters.append(user.id)
            current["helpfulBy"] = voters
            current["helpful"] = len(voters)
            return current

        review = self.store.mutate(self.key(review_id), mutator)
        logger.info(
            f"User {user.id} toggled helpful on review {review_id} "
            f"(now {review['helpful']})"
        )
        return review
