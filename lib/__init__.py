# =============================================================================
# lib/ - Standalone Infrastructure Modules
# =============================================================================
# This package contains the backend's outbound adapters:
# - supabase_client.py: Lazily created Supabase SDK clients
# - kv_store.py: Namespaced key-value store (in-memory and Supabase table)
# - identity.py: Identity provider bridge (token verification, signup, profile)
# - utils.py: Shared utilities (ids, timestamps, avatars)
#
# These modules know nothing about HTTP and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.kv_store import (
    KVStore,
    KVStoreError,
    InMemoryKVStore,
    SupabaseKVStore,
)
from lib.identity import (
    AuthUser,
    IdentityProvider,
    IdentityProviderError,
    SignupResult,
    SupabaseIdentityProvider,
)
from lib.utils import entity_key, new_id, normalize_uuid, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Key-value store
    "KVStore",
    "KVStoreError",
    "InMemoryKVStore",
    "SupabaseKVStore",
    # Identity
    "AuthUser",
    "IdentityProvider",
    "IdentityProviderError",
    "SignupResult",
    "SupabaseIdentityProvider",
    # Utils
    "entity_key",
    "new_id",
    "normalize_uuid",
    "utc_now_iso",
]
