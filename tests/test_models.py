# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request and document models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Partial updates report only what the client sent
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    FavoriteType,
    Favorites,
    ItineraryCreate,
    ItineraryUpdate,
    MarketCreate,
    MarketUpdate,
    ReviewCreate,
    ReviewType,
    VendorUpdate,
)


# =============================================================================
# Market Model Tests
# =============================================================================

class TestMarketModels:
    """Tests for MarketCreate and MarketUpdate."""

    def test_valid_market_create(self):
        """Test creating a market with only required fields."""
        # Arrange & Act
        market = MarketCreate(name=" Feira ", description="Sunday", address="Praça 1")

        # Assert: whitespace stripped, optional fields defaulted
        assert market.name == "Feira"
        assert market.photos == []
        assert market.website == ""

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            MarketCreate(name="  ", description="Sunday", address="Praça 1")

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            MarketCreate(name="Feira", description="Sunday", address="Praça 1", rating=5)

    def test_update_changes_only_sent_fields(self):
        """Omitted and null fields are not changes; empty strings are."""
        update = MarketUpdate(description="", name=None)

        assert update.changes() == {"description": ""}

    def test_update_cannot_blank_name(self):
        with pytest.raises(ValidationError):
            MarketUpdate(name="")


# =============================================================================
# Vendor & Itinerary Model Tests
# =============================================================================

class TestVendorAndItineraryModels:
    """Tests for vendor and itinerary schemas."""

    def test_vendor_update_lists(self):
        update = VendorUpdate(products=["Cheese"], badges=[])

        assert update.changes() == {"products": ["Cheese"], "badges": []}

    def test_itinerary_needs_stops(self):
        with pytest.raises(ValidationError):
            ItineraryCreate(market_id="m1", title="Tour", description="d", stops=[])

    def test_itinerary_stop_defaults(self):
        itinerary = ItineraryCreate(
            market_id="m1", title="Tour", description="d", stops=[{"name": "Café"}]
        )

        assert itinerary.stops[0].location == ""

    def test_itinerary_update_keeps_stop_defaults(self):
        """Replaced stops are stored whole, defaults included."""
        update = ItineraryUpdate(stops=[{"name": "Only stop"}])

        assert update.changes() == {
            "stops": [{"name": "Only stop", "description": "", "location": ""}]
        }

    def test_vendor_update_cannot_blank_specialty(self):
        with pytest.raises(ValidationError):
            VendorUpdate(specialty="   ")


# =============================================================================
# Review Model Tests
# =============================================================================

class TestReviewCreate:
    """Tests for ReviewCreate validation."""

    def test_default_type_is_market(self):
        review = ReviewCreate(market="m1", rating=3, comment="ok")
        assert review.review_type == ReviewType.MARKET

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, rating):
        with pytest.raises(ValidationError):
            ReviewCreate(market="m1", rating=rating, comment="ok")

    def test_vendor_review_requires_vendor_id(self):
        with pytest.raises(ValidationError, match="Vendor ID is required"):
            ReviewCreate(review_type="vendor", rating=3, comment="ok")

    def test_market_review_requires_market(self):
        with pytest.raises(ValidationError, match="Market is required"):
            ReviewCreate(rating=3, comment="ok")

    def test_vendor_review_without_market_is_fine(self):
        review = ReviewCreate(review_type="vendor", vendor_id="v1", rating=3, comment="ok")
        assert review.market is None


# =============================================================================
# Favorites Model Tests
# =============================================================================

class TestFavorites:
    """Tests for Favorites.normalize."""

    def test_list_names(self):
        assert FavoriteType.MARKET.list_name == "markets"
        assert FavoriteType.VENDOR.list_name == "vendors"

    @pytest.mark.parametrize("raw", [None, [], "x", 42])
    def test_non_object_becomes_empty(self, raw):
        favorites = Favorites.normalize(raw)
        assert favorites.markets == [] and favorites.vendors == []

    def test_drops_entries_without_id(self):
        favorites = Favorites.normalize({
            "markets": [{"id": "m1", "name": "A"}, {"name": "B"}, "junk"],
            "vendors": None,
        })

        assert favorites.markets == [{"id": "m1", "name": "A"}]
        assert favorites.vendors == []

    def test_contains(self):
        favorites = Favorites.normalize({"vendors": [{"id": "v1"}]})

        assert favorites.contains(FavoriteType.VENDOR, "v1")
        assert not favorites.contains(FavoriteType.MARKET, "v1")
