# database/models.py
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text

# Important: must match Base from db_setup.py
from .db_setup import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """A showcased project on the portfolio."""
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    role = Column(String(120), nullable=True)
    tech_stack = Column(JSON, nullable=True)  # list of labels
    image_url = Column(String(500), nullable=True)
    link = Column(String(500), nullable=True)
    order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Project(id={self.id}, title={self.title!r})>"


class Skill(Base):
    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    category = Column(String(120), nullable=False)  # e.g. "GIS Software", "Programming"
    proficiency = Column(Integer, nullable=True)  # 1-100
    icon = Column(String(120), nullable=True)

    def __repr__(self):
        return f"<Skill(id={self.id}, name={self.name!r}, category={self.category!r})>"


class Experience(Base):
    __tablename__ = "experiences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company = Column(String(200), nullable=False)
    role = Column(String(200), nullable=False)
    duration = Column(String(120), nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), nullable=True)
    order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Experience(id={self.id}, company={self.company!r}, role={self.role!r})>"


class Education(Base):
    __tablename__ = "educations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    institution = Column(String(200), nullable=False)
    degree = Column(String(200), nullable=False)
    year = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Education(id={self.id}, institution={self.institution!r})>"


class Testimony(Base):
    __tablename__ = "testimonies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), nullable=False)
    content = Column(Text, nullable=False)
    role = Column(String(200), nullable=True)
    avatar_url = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<Testimony(id={self.id}, name={self.name!r})>"


class Message(Base):
    """A contact-form submission. Write-only from the API's point of view."""
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(320), nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self):
        return f"<Message(id={self.id}, email={self.email!r})>"
