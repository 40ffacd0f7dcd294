"""
core/errors.py
--------------
Exceptions shared by the API clients and the UI.

Validation failures are handled by FastAPI/pydantic at the request
boundary; missing fixture references are filtered out silently. Only
remote fetches need an exception type of their own.
"""

from __future__ import annotations


class TransientFetchError(RuntimeError):
    """A remote fetch failed (network error or non-2xx). Not retried."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Request to {url} failed: {reason}")
