"""
core/ui_helpers.py
------------------
Shared backend request helpers for the Streamlit pages.

- Prefixes BACKEND_URL and decodes JSON.
- Any network failure or non-2xx response becomes a TransientFetchError;
  pages show it as an error state. There is no retry: the visitor
  refreshes the page.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from core.config import BACKEND_URL, HTTP_TIMEOUT
from core.errors import TransientFetchError
from core.logging_setup import get_logger

log = get_logger(__name__)


def _url(endpoint: str, base_url: Optional[str] = None) -> str:
    return f"{(base_url or BACKEND_URL).rstrip('/')}/{endpoint.lstrip('/')}"


def fetch_backend(
    endpoint: str,
    params: Optional[Dict[str, Any]] = None,
    base_url: Optional[str] = None,
    timeout: float = HTTP_TIMEOUT,
) -> Any:
    """GET `endpoint` and return the decoded JSON body."""
    url = _url(endpoint, base_url)
    try:
        resp = requests.get(url, params=params, timeout=timeout)
    except requests.exceptions.RequestException as e:
        log.warning("[Backend] GET %s unreachable: %s", url, e.__class__.__name__)
        raise TransientFetchError(url, e.__class__.__name__) from e

    if not resp.ok:
        log.warning("[Backend] GET %s -> HTTP %s", url, resp.status_code)
        raise TransientFetchError(url, f"HTTP {resp.status_code}", resp.status_code)

    try:
        return resp.json()
    except ValueError as e:
        raise TransientFetchError(url, "invalid JSON body", resp.status_code) from e


def submit_contact(
    name: str,
    email: str,
    message: str,
    base_url: Optional[str] = None,
    timeout: float = HTTP_TIMEOUT,
) -> Dict[str, Any]:
    """
    POST the contact form.

    Returns
    -------
    dict
        The decoded body for both 200 ({success, message}) and
        400 ({message, field}) responses, so the form can point at the
        offending field.

    Raises
    ------
    TransientFetchError
        Network failure or any other status code.
    """
    url = _url("/api/contact", base_url)
    payload = {"name": name, "email": email, "message": message}
    try:
        resp = requests.post(url, json=payload, timeout=timeout)
    except requests.exceptions.RequestException as e:
        log.warning("[Contact] POST %s unreachable: %s", url, e.__class__.__name__)
        raise TransientFetchError(url, e.__class__.__name__) from e

    if resp.status_code in (200, 400):
        return resp.json()

    log.warning("[Contact] POST %s -> HTTP %s", url, resp.status_code)
    raise TransientFetchError(url, f"HTTP {resp.status_code}", resp.status_code)
