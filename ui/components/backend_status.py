# ui/components/backend_status.py
"""
Backend health indicator for the Streamlit pages.

Features
--------
- Typed /health schema via Pydantic.
- Cached with st.cache_data.
- Never crashes a page: an unreachable backend renders as "offline".
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import streamlit as st
from pydantic import BaseModel, Field

from core.config import BACKEND_STATUS_TTL
from core.errors import TransientFetchError
from core.ui_helpers import fetch_backend


STATUS_COLORS: Dict[str, str] = {
    "ok": "green",
    "degraded": "orange",
    "error": "red",
    "offline": "red",
}


class HealthSchema(BaseModel):
    """Structured schema for the /health endpoint response."""
    status: str = Field(default="unknown", description="Overall backend status")
    message: Optional[str] = Field(default=None, description="Optional status message")
    version: Optional[str] = Field(default=None, description="Backend version string")
    database_connected: Optional[bool] = Field(default=None, description="Profile database reachable")
    supabase_configured: Optional[bool] = Field(default=None, description="Contact mirror configured")
    cpu_load: Optional[float] = Field(default=None, description="Backend CPU load")
    memory_usage: Optional[float] = Field(default=None, description="Backend memory usage in MB")
    uptime_sec: Optional[float] = Field(default=None, description="Seconds since backend start")

    def color(self) -> str:
        return get_status_color(self.status)


def get_status_color(status: str) -> str:
    return STATUS_COLORS.get(status.lower(), "gray")


def status_badge(health: HealthSchema) -> str:
    """Coloured HTML badge for the sidebar."""
    return (
        f"<span style='color:{health.color()}; font-weight:600;'>"
        f"● {health.status.upper()}</span>"
    )


def load_backend_status(base_url: Optional[str] = None) -> Dict[str, Any]:
    """
    Fetch /health and validate it, with a structured fallback.

    Returns
    -------
    dict
        HealthSchema fields; status "offline" when the backend is unreachable.
    """
    try:
        data = fetch_backend("/health", base_url=base_url)
    except TransientFetchError as e:
        return HealthSchema(status="offline", message=e.reason).model_dump()
    return HealthSchema(**data).model_dump()


@st.cache_data(ttl=BACKEND_STATUS_TTL)
def get_backend_status() -> Dict[str, Any]:
    return load_backend_status()


def render_status_bar(expanded: bool = False):
    """Render a compact backend health summary in the sidebar."""
    st.sidebar.markdown("---")
    st.sidebar.caption("### Backend Status")

    health = get_backend_status()
    st.sidebar.markdown(status_badge(HealthSchema(**health)), unsafe_allow_html=True)
    if health.get("message"):
        st.sidebar.caption(health["message"])

    if expanded:
        with st.sidebar.expander("Diagnostics", expanded=False):
            if health.get("cpu_load") is not None:
                st.write(f"CPU load: {health['cpu_load']}%")
            if health.get("memory_usage") is not None:
                st.write(f"Memory: {health['memory_usage']} MB")
            if health.get("version"):
                st.write(f"Version: {health['version']}")
            st.json(health)
