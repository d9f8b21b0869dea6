# facultyeval/models/period.py
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

PERIOD_STATUSES = ("draft", "open", "closed")
PERIOD_OPEN = "open"


class EvaluationPeriod(SQLModel, table=True):
    __tablename__ = "evaluation_periods"

    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    # the only gate for submissions; any status may follow any other
    status: str = Field(default="draft", index=True)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rubric_version: str = "v1"
    created_at: datetime = Field(default_factory=utcnow)
