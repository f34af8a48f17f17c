# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module owns the Supabase SDK clients used by the backend:
# - An admin client (service_role key) for the key-value table and for
#   administrative auth calls (create user, update user)
# - Public clients (anon key) for token verification and password sign-in
#
# Unlike a module-level singleton, a SupabaseClient instance is constructed
# explicitly by the composition root (app/main.py) and lives as long as the
# server process. SDK clients are created lazily on first use so the app can
# be imported and wired without network access.
#
# Usage:
#   supabase = SupabaseClient(url, anon_key, service_key)
#   supabase.admin.table("kv_store").select("value").execute()
# =============================================================================

from __future__ import annotations

import logging
import threading
from typing import Any

from supabase import create_client, Client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase client setup.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Holder for the Supabase SDK clients of one server process.

    Example:
        supabase = SupabaseClient(
            url="https://xxx.supabase.co",
            anon_key="...",
            service_key="...",
        )
        user = supabase.public.auth.get_user(token)
    """

    def __init__(self, url: str, anon_key: str, service_key: str):
        self.url = url
        self._anon_key = anon_key
        self._service_key = service_key
        self._admin: Client | None = None
        self._public: Client | None = None
        self._lock = threading.Lock()

    def _create(self, key: str, label: str) -> Client:
        try:
            client = create_client(self.url, key)
            logger.info(f"Supabase {label} client initialized successfully")
            return client
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase {label} client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL, SUPABASE_ANON_KEY and SUPABASE_SERVICE_KEY in your .env file",
            )

    @property
    def admin(self) -> Client:
        """
        Client authenticated with the service_role key.

        Bypasses Row Level Security (RLS); server-side use only.
        """
        with self._lock:
            if self._admin is None:
                self._admin = self._create(self._service_key, "admin")
            return self._admin

    @property
    def public(self) -> Client:
        """
        Shared client authenticated with the anon key.

        Only used for stateless calls such as token verification.
        """
        with self._lock:
            if self._public is None:
                self._public = self._create(self._anon_key, "public")
            return self._public

    def new_public_client(self) -> Client:
        """
        Fresh anon-key client for calls that store a session on the client.

        Password sign-in keeps the resulting session on the client object,
        so each sign-in gets its own client instead of the shared one.
        """
        return self._create(self._anon_key, "sign-in")
