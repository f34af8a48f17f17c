# =============================================================================
# core/models/review.py - Review Schemas
# =============================================================================
# These models define the API contract for reviews:
# - ReviewType: what is being reviewed (a market or a vendor)
# - ReviewCreate: Input for a new review, with type-dependent requirements
# - ReviewUpdate: Owner edit of rating/comment/photos
# - Review: The stored document (key "review:<id>")
#
# Field names follow the documents already stored by the web client
# (authorAvatar, helpfulBy, updatedAt), so they are kept as-is.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .base import RequestModel

MIN_RATING = 1
MAX_RATING = 5


class ReviewType(str, Enum):
    """
    What a review is about.

    - market: requires `market`
    - vendor: requires `vendor_id`
    """
    MARKET = "market"
    VENDOR = "vendor"


class ReviewCreate(RequestModel):
    """
    Schema for creating a review.

    Example (market review):
        {"market": "mercado-central", "rating": 5, "comment": "Great fruit"}

    Example (vendor review):
        {"review_type": "vendor", "vendor_id": "550e8400-...",
         "vendor_name": "Banca do Zé", "rating": 4, "comment": "Good cheese"}
    """

    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: str = Field(..., min_length=1)
    photos: list[str] = Field(default_factory=list)

    review_type: ReviewType = ReviewType.MARKET
    market: str | None = None
    vendor_id: str | None = None
    vendor_name: str | None = None

    @model_validator(mode="after")
    def check_review_target(self) -> "ReviewCreate":
        """A vendor review needs a vendor id; a market review needs a market."""
        if self.review_type == ReviewType.VENDOR and not self.vendor_id:
            raise ValueError("Vendor ID is required for vendor reviews")
        if self.review_type == ReviewType.MARKET and not self.market:
            raise ValueError("Market is required for market reviews")
        return self


class ReviewUpdate(RequestModel):
    """
    Schema for editing a review.

    The web client echoes review_type, market, vendor_id and vendor_name back
    when editing; they are accepted so the body validates, but the service
    refuses any attempt to change them.
    """

    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: str = Field(..., min_length=1)
    photos: list[str] | None = None

    review_type: ReviewType | None = None
    market: str | None = None
    vendor_id: str | None = None
    vendor_name: str | None = None


class Review(BaseModel):
    """Stored review document."""

    id: str
    user_id: str
    author: str
    authorAvatar: str
    market: str = ""
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING)
    comment: str
    photos: list[str] = Field(default_factory=list)
    date: str

    # helpful always equals len(helpfulBy)
    helpful: int = 0
    helpfulBy: list[str] = Field(default_factory=list)

    review_type: ReviewType = ReviewType.MARKET
    vendor_id: str | None = None
    vendor_name: str | None = None
