"""
backend/schemas.py
------------------
Pydantic models for the portfolio API (stable JSON contracts).

Profile records are serialized with camelCase keys (`techStack`,
`imageUrl`, `avatarUrl`, `createdAt`); they are built straight from ORM
rows via `from_attributes`.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --------------------------------------------------------------------------- #
# Profile records
# --------------------------------------------------------------------------- #

class ProjectOut(CamelModel):
    id: int
    title: str
    description: str
    role: Optional[str] = None
    tech_stack: Optional[List[str]] = None
    image_url: Optional[str] = None
    link: Optional[str] = None
    order: int = 0


class SkillOut(CamelModel):
    id: int
    name: str
    category: str
    proficiency: Optional[int] = None
    icon: Optional[str] = None


class ExperienceOut(CamelModel):
    id: int
    company: str
    role: str
    duration: str
    description: str
    location: Optional[str] = None
    order: int = 0


class EducationOut(CamelModel):
    id: int
    institution: str
    degree: str
    year: str
    description: Optional[str] = None
    order: int = 0


class TestimonyOut(CamelModel):
    id: int
    name: str
    content: str
    role: Optional[str] = None
    avatar_url: Optional[str] = None


# --------------------------------------------------------------------------- #
# Contact form
# --------------------------------------------------------------------------- #

class ContactRequest(BaseModel):
    """
    Contact-form submission.

    Field order matters: validation errors are reported for the first
    failing field in declaration order.
    """
    name: str = Field(min_length=1)
    email: EmailStr
    message: str = Field(min_length=1)


class ContactResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    message: str
    field: Optional[str] = None
