# =============================================================================
# app/routers/reviews.py - Review Endpoints
# =============================================================================
# Public reads; signed-in users write reviews and vote them helpful.
# Only the author can edit or delete a review.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.dependencies import ReviewServiceDep
from core.models.review import ReviewCreate, ReviewUpdate

router = APIRouter()

ReviewId = Annotated[str, Path(description="Review id")]


@router.get("")
async def list_reviews(
    reviews: ReviewServiceDep,
    market: Annotated[str | None, Query(description="Only reviews of this market")] = None,
    vendor: Annotated[str | None, Query(description="Only reviews of this vendor id")] = None,
):
    """List reviews, newest first."""
    return {"reviews": reviews.list_reviews(market=market, vendor_id=vendor)}


@router.get("/{review_id}")
async def get_review(review_id: ReviewId, reviews: ReviewServiceDep):
    """Get one review."""
    return {"review": reviews.get(review_id)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_review(
    request: ReviewCreate,
    reviews: ReviewServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Submit a review.

    rating must be 1-5. A vendor review needs vendor_id; a market review
    (the default) needs market.
    """
    return {"review": reviews.create(request, user)}


@router.put("/{review_id}")
async def update_review(
    review_id: ReviewId,
    request: ReviewUpdate,
    reviews: ReviewServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Edit a review's rating, comment and photos.

    What the review is about (type, market, vendor) cannot change.
    User must be the author.
    """
    return {"review": reviews.edit(review_id, request, user)}


@router.delete("/{review_id}")
async def delete_review(
    review_id: ReviewId,
    reviews: ReviewServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete a review. User must be the author."""
    reviews.delete(review_id, user)
    return {"success": True, "message": "Review deleted successfully"}


@router.post("/{review_id}/helpful")
async def toggle_helpful(
    review_id: ReviewId,
    reviews: ReviewServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Toggle the caller's "helpful" vote.

    Calling twice returns the review to where it started.
    """
    return {"review": reviews.toggle_helpful(review_id, user)}
