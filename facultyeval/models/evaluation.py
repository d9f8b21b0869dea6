# facultyeval/models/evaluation.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

EVALUATION_DRAFT = "draft"
EVALUATION_SUBMITTED = "submitted"


class Evaluation(SQLModel, table=True):
    __tablename__ = "evaluations"

    id: str = Field(default_factory=new_id, primary_key=True)
    # one evaluation per assignment
    assignment_id: str = Field(
        foreign_key="evaluator_assignments.id", ondelete="CASCADE", unique=True, index=True
    )
    status: str = EVALUATION_DRAFT
    submitted_at: Optional[datetime] = None
    overall_comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class EvaluationResponse(SQLModel, table=True):
    __tablename__ = "evaluation_responses"
    __table_args__ = (
        UniqueConstraint("evaluation_id", "rubric_item_id", name="uq_responses_evaluation_item"),
    )

    id: str = Field(default_factory=new_id, primary_key=True)
    evaluation_id: str = Field(foreign_key="evaluations.id", ondelete="CASCADE", index=True)
    rubric_item_id: str = Field(foreign_key="rubric_items.id", ondelete="CASCADE", index=True)
    score: int
    comment: Optional[str] = None
