# supabase_client/helpers.py
"""
Utility layer for the optional Supabase mirror.

Features
--------
- Best-effort insert of contact-form submissions into a Supabase table.
- Failures are logged and swallowed: the local database is the system of
  record, the mirror must never fail an API request.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from core.config import SUPABASE_CONTACT_TABLE, supabase_configured
from core.logging_setup import get_logger
from supabase_client.config import get_supabase_client

log = get_logger(__name__)


def insert_record(table: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Insert a record into a Supabase table.

    Parameters
    ----------
    table : str
        Target table name in Supabase.
    data : dict
        Column names and values. A `created_at` timestamp is added when
        missing.

    Returns
    -------
    dict
        Inserted record data, or an empty dict on failure.
    """
    payload = dict(data)
    payload.setdefault("created_at", dt.datetime.now(dt.timezone.utc).isoformat())
    try:
        supabase = get_supabase_client()
        log.debug("[Supabase] inserting into '%s' (keys=%s)", table, list(payload))
        res = supabase.table(table).insert(payload).execute()
    except Exception as e:  # noqa: BLE001 - mirror is best-effort
        log.warning("[Supabase] insert into '%s' failed: %s: %s", table, type(e).__name__, e)
        return {}

    rows = res.data or []
    if not rows:
        log.warning("[Supabase] insert into '%s' returned no data (check RLS / schema)", table)
        return {}
    return rows[0] if isinstance(rows, list) else rows


def mirror_contact_message(data: Dict[str, Any]) -> Dict[str, Any]:
    """Mirror a stored contact message when Supabase is configured; no-op otherwise."""
    if not supabase_configured():
        return {}
    return insert_record(SUPABASE_CONTACT_TABLE, data)

