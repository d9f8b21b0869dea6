# facultyeval/models/sentiment.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

SENTIMENTS = ("positive", "neutral", "negative")


class StudentSentiment(SQLModel, table=True):
    __tablename__ = "student_sentiments"

    id: str = Field(default_factory=new_id, primary_key=True)
    student_id: Optional[str] = Field(default=None, foreign_key="profiles.id", ondelete="SET NULL")
    period_id: Optional[str] = Field(default=None, foreign_key="evaluation_periods.id", ondelete="SET NULL")
    section_id: Optional[str] = Field(default=None, foreign_key="sections.id", ondelete="SET NULL")
    faculty_id: Optional[str] = Field(default=None, foreign_key="profiles.id", ondelete="SET NULL")
    sentiment: str = "positive"
    comments: str
    created_at: datetime = Field(default_factory=utcnow, index=True)
