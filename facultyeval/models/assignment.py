# facultyeval/models/assignment.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

EVALUATION_ROLES = ("self", "peer", "supervisor", "student")


class EvaluatorAssignment(SQLModel, table=True):
    __tablename__ = "evaluator_assignments"

    id: str = Field(default_factory=new_id, primary_key=True)
    period_id: str = Field(foreign_key="evaluation_periods.id", ondelete="CASCADE", index=True)
    faculty_id: str = Field(foreign_key="profiles.id", ondelete="CASCADE", index=True)
    evaluator_id: str = Field(foreign_key="profiles.id", ondelete="CASCADE", index=True)
    role: str = "peer"  # self | peer | supervisor | student
    section_id: Optional[str] = Field(default=None, foreign_key="sections.id", ondelete="SET NULL", index=True)
    created_at: datetime = Field(default_factory=utcnow)
