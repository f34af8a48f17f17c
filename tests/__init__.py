# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Market Directory API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_kv_store.py / test_identity.py: Store and identity adapters
# - test_*_api.py: Endpoint tests through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
