"""
Dice Poker - Supabase Client

Thread-safe singleton factory for the Supabase client that backs the Ledger.
"""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from src.config.settings import get_settings


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Create and cache a Supabase client with bounded request time."""
    settings = get_settings()
    options = ClientOptions(postgrest_client_timeout=settings.ledger_timeout)
    return create_client(settings.supabase_url, settings.supabase_anon_key, options=options)
