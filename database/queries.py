# database/queries.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import Education, Experience, Message, Project, Skill, Testimony

# ---------------------------------------------------------------------
# Read operations (one per public list endpoint)
# ---------------------------------------------------------------------
def list_projects(session: Session) -> List[Project]:
    """Projects by display order, then insertion order."""
    return list(session.scalars(select(Project).order_by(Project.order, Project.id)).all())


def list_skills(session: Session) -> List[Skill]:
    return list(session.scalars(select(Skill).order_by(Skill.id)).all())


def list_experiences(session: Session) -> List[Experience]:
    return list(session.scalars(select(Experience).order_by(Experience.order, Experience.id)).all())


def list_educations(session: Session) -> List[Education]:
    return list(session.scalars(select(Education).order_by(Education.order, Education.id)).all())


def list_testimonies(session: Session) -> List[Testimony]:
    return list(session.scalars(select(Testimony).order_by(Testimony.id)).all())


def count_experiences(session: Session) -> int:
    return int(session.scalar(select(func.count()).select_from(Experience)) or 0)


# ---------------------------------------------------------------------
# Create operations
# ---------------------------------------------------------------------
def _add(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def create_project(
    session: Session,
    *,
    title: str,
    description: str,
    role: Optional[str] = None,
    tech_stack: Optional[List[str]] = None,
    image_url: Optional[str] = None,
    link: Optional[str] = None,
    order: int = 0,
) -> Project:
    return _add(session, Project(
        title=title,
        description=description,
        role=role,
        tech_stack=list(tech_stack) if tech_stack is not None else None,
        image_url=image_url,
        link=link,
        order=order,
    ))


def create_skill(
    session: Session,
    *,
    name: str,
    category: str,
    proficiency: Optional[int] = None,
    icon: Optional[str] = None,
) -> Skill:
    return _add(session, Skill(name=name, category=category, proficiency=proficiency, icon=icon))


def create_experience(
    session: Session,
    *,
    company: str,
    role: str,
    duration: str,
    description: str,
    location: Optional[str] = None,
    order: int = 0,
) -> Experience:
    return _add(session, Experience(
        company=company,
        role=role,
        duration=duration,
        description=description,
        location=location,
        order=order,
    ))


def create_education(
    session: Session,
    *,
    institution: str,
    degree: str,
    year: str,
    description: Optional[str] = None,
    order: int = 0,
) -> Education:
    return _add(session, Education(
        institution=institution, degree=degree, year=year, description=description, order=order,
    ))


def create_testimony(
    session: Session,
    *,
    name: str,
    content: str,
    role: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> Testimony:
    return _add(session, Testimony(name=name, content=content, role=role, avatar_url=avatar_url))


def create_message(session: Session, *, name: str, email: str, message: str) -> Message:
    """
    Persist a validated contact-form submission.

    Validation happens at the API boundary; this function trusts its input.
    """
    return _add(session, Message(name=name, email=email, message=message))


def message_to_dict(msg: Message) -> Dict[str, Any]:
    """Row payload for external mirrors (e.g. Supabase)."""
    return {
        "name": msg.name,
        "email": msg.email,
        "message": msg.message,
        "created_at": msg.created_at.isoformat() if msg.created_at else None,
    }
