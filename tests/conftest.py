# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds the app around an in-memory store and a fake identity provider,
#   so no test talks to Supabase
# - Provides bearer-token headers for two users (alice and bob)
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("KV_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import create_app
from lib.identity import AuthUser, IdentityProvider, IdentityProviderError, SignupResult
from lib.kv_store import InMemoryKVStore

API = settings.api_prefix

ALICE = AuthUser(
    id="11111111-1111-1111-1111-111111111111",
    email="alice@example.com",
    name="Alice",
    created_at="2024-01-15T10:00:00+00:00",
)
BOB = AuthUser(
    id="22222222-2222-2222-2222-222222222222",
    email="bob@example.com",
    name="Bob",
    created_at="2024-02-01T09:30:00+00:00",
)


# =============================================================================
# Fake Identity Provider
# =============================================================================

class FakeIdentityProvider(IdentityProvider):
    """
    In-memory identity provider.

    Tokens map straight to users. sign_up mints "token-<n>" tokens so a
    test can sign up and then call authenticated endpoints.
    """

    def __init__(self):
        self.tokens: dict[str, AuthUser] = {}
        self.passwords: dict[str, str] = {}
        self.update_calls: list[dict] = []

    def register(self, token: str, user: AuthUser) -> None:
        self.tokens[token] = user

    def verify(self, token: str) -> AuthUser | None:
        return self.tokens.get(token)

    def sign_up(self, name: str, email: str, password: str) -> SignupResult:
        if any(user.email == email for user in self.tokens.values()):
            raise IdentityProviderError("User already registered", user_facing=True)
        if len(password) < 6:
            raise IdentityProviderError(
                "Password should be at least 6 characters", user_facing=True
            )

        number = len(self.tokens) + 1
        user = AuthUser(
            id=f"00000000-0000-0000-0000-{number:012d}",
            email=email,
            name=name,
            created_at="2024-03-01T12:00:00+00:00",
        )
        token = f"token-{number}"
        self.tokens[token] = user
        self.passwords[user.id] = password
        return SignupResult(
            user=user,
            session={"access_token": token, "token_type": "bearer"},
        )

    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> AuthUser:
        self.update_calls.append({"user_id": user_id, "name": name, "email": email, "password": password})
        for token, user in self.tokens.items():
            if user.id == user_id:
                updated = user.model_copy(update={
                    "name": name or user.name,
                    "email": email or user.email,
                })
                self.tokens[token] = updated
                if password:
                    self.passwords[user_id] = password
                return updated
        raise IdentityProviderError("User not found", user_facing=True)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory key-value store."""
    return InMemoryKVStore()


@pytest.fixture
def identity():
    """Fake identity provider that knows alice and bob."""
    provider = FakeIdentityProvider()
    provider.register("alice-token", ALICE)
    provider.register("bob-token", BOB)
    return provider


@pytest.fixture
def app(store, identity):
    """Application wired to the in-memory store and fake identity provider."""
    return create_app(store=store, identity=identity)


@pytest.fixture
def client(app):
    """HTTP client for the test app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def alice_headers():
    return {"Authorization": "Bearer alice-token"}


@pytest.fixture
def bob_headers():
    return {"Authorization": "Bearer bob-token"}


@pytest.fixture
def market_payload():
    """Minimal valid market body."""
    return {
        "name": "Mercado Central",
        "description": "Covered market with 200 stalls",
        "address": "Rua do Mercado, 1",
    }


@pytest.fixture
def create_market(client, alice_headers, market_payload):
    """Factory creating a market as alice (or other headers) and returning it."""
    def _create(headers=None, **overrides):
        body = {**market_payload, **overrides}
        response = client.post(f"{API}/markets", json=body, headers=headers or alice_headers)
        assert response.status_code == 201, response.text
        return response.json()["market"]
    return _create
