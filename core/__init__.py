# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the directory's business logic:
# - models/: Pydantic schemas for request validation and stored documents
# - services/: Entity rules (ownership, cascades, favorites, helpful votes)
#
# Services talk to the key-value store and identity provider through the
# interfaces in lib/, so they can be tested with in-memory fakes.
# =============================================================================
