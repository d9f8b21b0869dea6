# facultyeval/models/directory.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

PROFILE_ROLES = ("admin", "faculty", "evaluator", "student")


class Profile(SQLModel, table=True):
    __tablename__ = "profiles"

    id: str = Field(default_factory=new_id, primary_key=True)
    full_name: Optional[str] = None
    email: str = Field(index=True, unique=True)
    role: str = Field(default="faculty", index=True)  # admin | faculty | evaluator | student
    department_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class Course(SQLModel, table=True):
    __tablename__ = "courses"

    id: str = Field(default_factory=new_id, primary_key=True)
    code: str = Field(index=True, unique=True)
    title: str
    created_at: datetime = Field(default_factory=utcnow)


class Section(SQLModel, table=True):
    __tablename__ = "sections"

    id: str = Field(default_factory=new_id, primary_key=True)
    course_id: str = Field(foreign_key="courses.id", ondelete="CASCADE", index=True)
    faculty_id: Optional[str] = Field(default=None, foreign_key="profiles.id", ondelete="SET NULL", index=True)
    term: Optional[str] = None
    academic_year: Optional[str] = None
    schedule: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
