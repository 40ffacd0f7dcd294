# supabase_client/config.py
from supabase import Client, create_client

from core.config import SUPABASE_ANON_KEY, SUPABASE_URL


def get_supabase_client() -> Client:
    """Return an authenticated Supabase client if credentials are set."""
    if not SUPABASE_URL or not SUPABASE_ANON_KEY:
        raise RuntimeError("Supabase credentials not set in environment variables.")
    return create_client(SUPABASE_URL, SUPABASE_ANON_KEY)
