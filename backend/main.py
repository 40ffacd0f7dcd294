"""
GeoPortfolio Backend API
========================

FastAPI service behind the portfolio site: profile content, the contact
form, the showcase analytics and health endpoints.

Design Intent
-------------
• `create_app()` builds a fully wired app; tests pass their own engine
  (in-memory SQLite) and fixture repository.
• The lifespan creates tables, seeds the CV content on an empty
  database and builds the demo fixtures once per process.
• Errors render as {"message": ...}; request validation failures become
  400 {"message": "Invalid input", "field": <first failing field>}.
• Optional Supabase mirroring of contact messages lives in
  `supabase_client` and never fails a request.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from analytics.fixtures import FixtureRepository, build_fixture_repository
from backend.routes.portfolio import router as portfolio_router
from backend.routes.showcase import router as showcase_router
from core.config import BACKEND_VERSION, SEED_ON_STARTUP, TIMESERIES_SEED
from core.health import system_health
from core.logging_setup import get_logger, setup_logging
from core.metadata import get_metadata
from database.db_setup import get_engine, get_session_factory, init_db
from database.seed import seed_database

log = get_logger(__name__)


# --------------------------------------------------------------------------- #
# Error Mapping
# --------------------------------------------------------------------------- #

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _first_error_field(exc: RequestValidationError) -> str:
    """Dotted path of the first failing field, without the request-part prefix."""
    errors = exc.errors()
    if not errors:
        return ""
    first = errors[0]
    loc = list(first.get("loc", ()))
    # malformed JSON is located by byte offset, not by field
    if first.get("type") == "json_invalid" or (len(loc) > 1 and not isinstance(loc[1], str)):
        return str(loc[0]) if loc else "body"
    if loc and loc[0] in _LOCATION_PREFIXES and len(loc) > 1:
        loc = loc[1:]
    return ".".join(str(part) for part in loc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    field = _first_error_field(exc)
    log.info("[Backend] invalid input on %s %s (field=%s)", request.method, request.url.path, field)
    return JSONResponse(status_code=400, content={"message": "Invalid input", "field": field})


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("[Backend] unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# --------------------------------------------------------------------------- #
# App Factory
# --------------------------------------------------------------------------- #

def create_app(
    engine: Optional[Engine] = None,
    fixtures: Optional[FixtureRepository] = None,
    seed: bool = SEED_ON_STARTUP,
    timeseries_seed: Optional[int] = TIMESERIES_SEED,
) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    engine : sqlalchemy.engine.Engine, optional
        Profile database engine (DATABASE_URL if omitted).
    fixtures : FixtureRepository, optional
        Showcase fixtures (the demo repository if omitted).
    seed : bool
        Insert CV content on startup when the database is empty.
    timeseries_seed : int, optional
        Seed for chart series; None keeps them organic.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging()
        db_engine = engine if engine is not None else get_engine()
        init_db(db_engine)
        app.state.engine = db_engine
        app.state.session_factory = get_session_factory(db_engine)
        app.state.fixtures = fixtures if fixtures is not None else build_fixture_repository()
        app.state.timeseries_seed = timeseries_seed

        if seed:
            with app.state.session_factory() as session:
                seed_database(session)

        log.info(
            "[Backend] ready (fields=%d, actors=%d)",
            len(app.state.fixtures.fields), len(app.state.fixtures.actors),
        )
        yield
        if engine is None:
            db_engine.dispose()

    app = FastAPI(
        title="GeoPortfolio Backend API",
        version=BACKEND_VERSION,
        description=(
            "Backend for the geospatial portfolio site.\n"
            "- Profile content (projects, skills, experiences, educations, testimonies).\n"
            "- Contact form with optional Supabase mirroring.\n"
            "- Showcase analytics: digital twin, supply-chain emission, flood layers."
        ),
        lifespan=lifespan,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(portfolio_router)
    app.include_router(showcase_router)

    # ----------------------------------------------------------------------- #
    # Core Routes
    # ----------------------------------------------------------------------- #

    @app.get("/")
    def root():
        """Basic liveness probe."""
        return {"status": "ok", "message": "GeoPortfolio Backend is live.", **get_metadata()}

    @app.get("/health")
    def health(request: Request):
        return system_health(getattr(request.app.state, "engine", None))

    return app


app = create_app()
