# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Market Directory API.
# create_app() is the composition root: it builds the key-value store and
# the identity provider once, attaches them to app.state and mounts the
# routers under API_PREFIX.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.exceptions import (
    MarketDirectoryException,
    identity_provider_exception_handler,
    kv_store_exception_handler,
    market_directory_exception_handler,
    validation_exception_handler,
)
from app.routers import health, markets, vendors, reviews, itineraries, favorites, profile
from app.auth import routes as auth_routes
from lib.identity import IdentityProvider, IdentityProviderError, SupabaseIdentityProvider
from lib.kv_store import InMemoryKVStore, KVStore, KVStoreError, SupabaseKVStore
from lib.supabase_client import SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown. Nothing is opened here: Supabase clients
    connect lazily on first use.
    """
    logger.info(f"Starting Market Directory API in {settings.ENVIRONMENT} mode")
    logger.info(f"Store backend: {type(app.state.store).__name__}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    yield

    logger.info("Shutting down Market Directory API")


def _build_store(supabase: SupabaseClient) -> KVStore:
    if settings.KV_BACKEND == "memory":
        logger.warning("Using in-memory store; data is lost on restart")
        return InMemoryKVStore()
    return SupabaseKVStore(supabase, table=settings.KV_TABLE)


def create_app(
    store: KVStore | None = None,
    identity: IdentityProvider | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Key-value store to use (defaults to the KV_BACKEND setting)
        identity: Identity provider to use (defaults to Supabase Auth)

    Returns:
        Configured FastAPI app
    """
    if store is None or identity is None:
        supabase = SupabaseClient(
            url=settings.SUPABASE_URL,
            anon_key=settings.SUPABASE_ANON_KEY,
            service_key=settings.SUPABASE_SERVICE_KEY,
        )
        if store is None:
            store = _build_store(supabase)
        if identity is None:
            identity = SupabaseIdentityProvider(supabase)

    app = FastAPI(
        title="Market Directory API",
        description="""
## Public Markets Directory API

Backend for a directory of the public markets of a city: markets, the vendors that sell
at them, reviews, suggested itineraries and per-user favorites.

### Access Rules

- **Reads** of markets, vendors, reviews and itineraries are public
- **Writes** need `Authorization: Bearer <access token>`
- **Edits and deletes** are only allowed for the user who created the entry
- **Favorites and profile** always belong to the caller

### Quick Start

```bash
# 1. Create an account (returns a session with an access token)
curl -X POST http://localhost:8000/api/v1/auth/signup \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Ana", "email": "ana@example.com", "password": "secret123"}'

# 2. Register a market
curl -X POST http://localhost:8000/api/v1/markets \\
  -H "Authorization: Bearer $TOKEN" \\
  -H "Content-Type: application/json" \\
  -d '{"name": "Green Square", "description": "Saturday market", "address": "1 Main St"}'

# 3. Browse
curl http://localhost:8000/api/v1/markets
```
""",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Account signup"},
            {"name": "Markets", "description": "Browse and manage markets"},
            {"name": "Vendors", "description": "Browse and manage vendors"},
            {"name": "Reviews", "description": "Market and vendor reviews, helpful votes"},
            {"name": "Itineraries", "description": "Suggested routes through a market"},
            {"name": "Favorites", "description": "The caller's favorite markets and vendors"},
            {"name": "Profile", "description": "The caller's account details"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.store = store
    app.state.identity = identity

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - the web client calls from the browser
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(MarketDirectoryException, market_directory_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IdentityProviderError, identity_provider_exception_handler)
    app.add_exception_handler(KVStoreError, kv_store_exception_handler)

    @app.exception_handler(Exception)
    async def handle_general_exception(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            }
        )

    # =========================================================================
    # Routers
    # =========================================================================

    prefix = settings.api_prefix

    # Account endpoints
    app.include_router(auth_routes.router, prefix=prefix)

    # Health check endpoints
    app.include_router(health.router, prefix=prefix, tags=["Health"])

    # Directory endpoints
    app.include_router(markets.router, prefix=f"{prefix}/markets", tags=["Markets"])
    app.include_router(vendors.router, prefix=f"{prefix}/vendors", tags=["Vendors"])
    app.include_router(reviews.router, prefix=f"{prefix}/reviews", tags=["Reviews"])
    app.include_router(itineraries.router, prefix=f"{prefix}/itineraries", tags=["Itineraries"])

    # Per-user endpoints
    app.include_router(favorites.router, prefix=f"{prefix}/favorites", tags=["Favorites"])
    app.include_router(profile.router, prefix=f"{prefix}/profile", tags=["Profile"])

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Market Directory API",
            "version": __version__,
            "docs": "/docs",
            "health": f"{prefix}/health",
        }

    return app


app = create_app()
