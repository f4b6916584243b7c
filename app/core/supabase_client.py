# app/core/supabase_client.py
from functools import lru_cache

from supabase import create_client, Client

from app.core.config import get_settings


def _client_for(key: str) -> Client:
    return create_client(get_settings().SUPABASE_URL, key)


@lru_cache
def supabase_public() -> Client:
    """
    Anon-key client for catalog reads (products, images, inventory).
    Row level security applies.
    """
    return _client_for(get_settings().SUPABASE_KEY)


@lru_cache
def supabase_admin() -> Client:
    """
    Service-role client for order writes.

    Bypasses RLS. The order user_id must come from the verified JWT.
    Backend only.

    Raises:
        RuntimeError: SUPABASE_SERVICE_ROLE_KEY is not configured.
    """
    key = get_settings().SUPABASE_SERVICE_ROLE_KEY
    if not key:
        raise RuntimeError("SUPABASE_SERVICE_ROLE_KEY is not set; order writes are disabled")
    return _client_for(key)
