# facultyeval/routers/faculty.py
from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from facultyeval.core import aggregation, directory
from facultyeval.core.db import get_session
from facultyeval.core.security import get_current_profile
from facultyeval.models import Evaluation, EvaluationPeriod, EvaluatorAssignment, Profile
from facultyeval.models.evaluation import EVALUATION_SUBMITTED

router = APIRouter(prefix="/faculty", tags=["faculty"])


@router.get("/me")
def faculty_overview(
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    """Profile, taught sections and the category averages of every submitted evaluation about the caller."""
    rows = session.exec(
        select(Evaluation, EvaluatorAssignment, EvaluationPeriod)
        .select_from(Evaluation)
        .join(EvaluatorAssignment, EvaluatorAssignment.id == Evaluation.assignment_id)
        .join(EvaluationPeriod, EvaluationPeriod.id == EvaluatorAssignment.period_id)
        .where(
            EvaluatorAssignment.faculty_id == profile.id,
            Evaluation.status == EVALUATION_SUBMITTED,
        )
        .order_by(Evaluation.submitted_at.desc())
    ).all()

    evaluations: List[Dict[str, Any]] = []
    for ev, a, period in rows:
        evaluations.append({
            "id": ev.id,
            "period": {"id": period.id, "name": period.name},
            "role": a.role,
            "submitted_at": ev.submitted_at,
            "overall_comment": ev.overall_comment,
            "averages": aggregation.category_averages(session, ev.id),
        })

    return {
        "ok": True,
        "profile": profile.model_dump(include={"id", "full_name", "email", "role"}),
        "sections": directory.list_sections(session, faculty_id=profile.id, limit=20),
        "evaluations": evaluations,
    }
