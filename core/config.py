"""
core/config.py
--------------
Central configuration hub for the backend, the Streamlit pages and tests.

- Reads every setting from environment variables once, at import time.
- Exposes plain module-level constants.
- Defaults run the whole stack locally with a SQLite file and no cloud.
"""

from __future__ import annotations

import os

# ---------------------------------------------------------------------------
# Backend / database
# ---------------------------------------------------------------------------

_DEFAULT_DB_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "database", "geoportfolio.db"
)

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{_DEFAULT_DB_PATH}")
SEED_ON_STARTUP: bool = os.getenv("SEED_ON_STARTUP", "1").lower() not in {"0", "false", "no"}
BACKEND_VERSION: str = os.getenv("BACKEND_VERSION", "1.0")

# ---------------------------------------------------------------------------
# UI -> backend
# ---------------------------------------------------------------------------

BACKEND_URL: str = os.getenv("BACKEND_URL", "http://127.0.0.1:8000").rstrip("/")
HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "10"))
BACKEND_STATUS_TTL: int = int(os.getenv("BACKEND_STATUS_TTL", "60"))  # seconds

# ---------------------------------------------------------------------------
# Flood & disaster tile/stat service
# ---------------------------------------------------------------------------

GEE_API_BASE: str = os.getenv("GEE_API_BASE", "https://api-v2.sustainit.id/api/v1/gee").rstrip("/")

# ---------------------------------------------------------------------------
# Showcase demo behaviour
# ---------------------------------------------------------------------------

# Unset = organic (unseeded) chart series
_seed = os.getenv("TIMESERIES_SEED")
TIMESERIES_SEED: int | None = int(_seed) if _seed not in (None, "") else None

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ---------------------------------------------------------------------------
# Optional Supabase mirror for contact messages
# ---------------------------------------------------------------------------

SUPABASE_URL: str | None = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY: str | None = os.getenv("SUPABASE_ANON_KEY")
SUPABASE_CONTACT_TABLE: str = os.getenv("SUPABASE_CONTACT_TABLE", "contact_messages")


def supabase_configured() -> bool:
    return bool(SUPABASE_URL and SUPABASE_ANON_KEY)
