"""
Portfolio Router
================

Profile content and the contact form.

Endpoints:
----------
- GET  /api/projects      → projects by display order
- GET  /api/skills        → skills in insertion order
- GET  /api/experiences   → work history by display order
- GET  /api/educations    → education by display order
- GET  /api/testimonies   → testimonies in insertion order
- POST /api/contact       → store a message (400 names the first invalid field)

Handlers are plain `def` functions (FastAPI runs them in its threadpool)
with one SQLAlchemy session per request. Database failures surface as
500 {"message": "Internal server error"}.
"""

from __future__ import annotations

from typing import Callable, List, TypeVar

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.dependencies import get_session
from backend.schemas import (
    ContactRequest,
    ContactResponse,
    EducationOut,
    ExperienceOut,
    ProjectOut,
    SkillOut,
    TestimonyOut,
)
from core.logging_setup import get_logger
from database import queries
from supabase_client.helpers import mirror_contact_message

log = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["portfolio"])

T = TypeVar("T")

INTERNAL_ERROR = "Internal server error"


def _run(what: str, fn: Callable[[], T]) -> T:
    """Run a database call, mapping failures to HTTP 500."""
    try:
        return fn()
    except SQLAlchemyError:
        log.exception("[Portfolio] %s failed", what)
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)


# --------------------------------------------------------------------------- #
# Profile content
# --------------------------------------------------------------------------- #

@router.get("/projects", response_model=List[ProjectOut])
def list_projects(session: Session = Depends(get_session)):
    return _run("list projects", lambda: queries.list_projects(session))


@router.get("/skills", response_model=List[SkillOut])
def list_skills(session: Session = Depends(get_session)):
    return _run("list skills", lambda: queries.list_skills(session))


@router.get("/experiences", response_model=List[ExperienceOut])
def list_experiences(session: Session = Depends(get_session)):
    return _run("list experiences", lambda: queries.list_experiences(session))


@router.get("/educations", response_model=List[EducationOut])
def list_educations(session: Session = Depends(get_session)):
    return _run("list educations", lambda: queries.list_educations(session))


@router.get("/testimonies", response_model=List[TestimonyOut])
def list_testimonies(session: Session = Depends(get_session)):
    return _run("list testimonies", lambda: queries.list_testimonies(session))


# --------------------------------------------------------------------------- #
# Contact
# --------------------------------------------------------------------------- #

@router.post("/contact", response_model=ContactResponse)
def submit_contact(
    body: ContactRequest,
    background_tasks: BackgroundTasks,
    session: Session = Depends(get_session),
):
    """
    Store a contact message.

    - Body validation (non-empty name/message, valid email) happens before
      this handler runs; failures become 400 via the app's handler.
    - The Supabase mirror runs as a background task after the response is
      sent; it is best-effort and never fails the request.
    """
    msg = _run(
        "store contact message",
        lambda: queries.create_message(
            session, name=body.name, email=str(body.email), message=body.message,
        ),
    )
    log.info("[Contact] message stored (id=%s)", msg.id)

    background_tasks.add_task(mirror_contact_message, queries.message_to_dict(msg))

    return {"success": True, "message": "Message received"}
