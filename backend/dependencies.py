"""
backend/dependencies.py
-----------------------
FastAPI dependencies shared by the routers.

Everything is read from `app.state`, populated once by the app lifespan:
- session_factory : sessionmaker bound to the profile database
- fixtures        : the showcase FixtureRepository
- timeseries_seed : optional seed for chart series
"""

from __future__ import annotations

from typing import Iterator

import numpy as np
from fastapi import Request
from sqlalchemy.orm import Session

from analytics.fixtures import FixtureRepository
from analytics.timeseries import default_rng


def get_session(request: Request) -> Iterator[Session]:
    """One session per request, closed when the response is sent."""
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_fixtures(request: Request) -> FixtureRepository:
    return request.app.state.fixtures


def get_rng(request: Request) -> np.random.Generator:
    return default_rng(getattr(request.app.state, "timeseries_seed", None))
