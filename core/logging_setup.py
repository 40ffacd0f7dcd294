"""
core/logging_setup.py
---------------------
Console logging for the backend and the Streamlit pages.

Messages carry a "[Component]" prefix, e.g. "[Contact] message stored (id=3)".
"""

from __future__ import annotations

import logging

from core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    global _configured
    level = (level or LOG_LEVEL).upper()
    if not _configured:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        # uvicorn access logs duplicate our request logs
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        _configured = True
    logging.getLogger().setLevel(level)


def get_logger(name: str = "geoportfolio") -> logging.Logger:
    return logging.getLogger(name)
