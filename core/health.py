"""
core/health.py
--------------
System health diagnostics for the GeoPortfolio backend.

Purpose
-------
- Used by the FastAPI `/health` endpoint and the Streamlit home page footer.
- Probes the profile database with a trivial query.
- Reports backend uptime, version, CPU/memory usage and whether the
  optional Supabase mirror is configured.
- Returns a JSON-safe dict ready for serialization.
"""

from __future__ import annotations

import platform
import time
from typing import Any, Dict, Optional

import psutil
from sqlalchemy import text
from sqlalchemy.engine import Engine

from core.config import BACKEND_VERSION, supabase_configured
from core.logging_setup import get_logger

log = get_logger(__name__)

# Cache the process start time for uptime calculation
START_TIME = time.time()


def database_connected(engine: Optional[Engine]) -> bool:
    if engine is None:
        return False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:  # noqa: BLE001 - any failure means "down"
        log.warning("[Health] database check failed: %s", e.__class__.__name__)
        return False


def system_health(engine: Optional[Engine] = None) -> Dict[str, Any]:
    """
    Return structured backend health diagnostics.

    Parameters
    ----------
    engine : sqlalchemy.engine.Engine, optional
        Engine backing the profile database.

    Returns
    -------
    dict
        status ("ok" | "degraded"), message, version, database_connected,
        supabase_configured, cpu_load, memory_usage (MB), uptime_sec,
        system, release.
    """
    db_ok = database_connected(engine)
    status = "ok" if db_ok else "degraded"
    message = "Backend operational." if db_ok else "Database check failed."

    # --- System metrics ---
    try:
        cpu_load = psutil.cpu_percent(interval=0.1)
        memory_usage = round(psutil.virtual_memory().used / (1024 * 1024), 2)
    except (psutil.Error, OSError):
        cpu_load = None
        memory_usage = None

    return {
        "status": status,
        "message": message,
        "version": BACKEND_VERSION,
        "database_connected": db_ok,
        "supabase_configured": supabase_configured(),
        "cpu_load": cpu_load,
        "memory_usage": memory_usage,
        "uptime_sec": round(time.time() - START_TIME, 2),
        "system": platform.system(),
        "release": platform.release(),
    }
