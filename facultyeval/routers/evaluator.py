# facultyeval/routers/evaluator.py
from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlmodel import Session

from facultyeval.core.assignments import AssignmentView, list_assignments
from facultyeval.core.db import get_session
from facultyeval.core.security import get_current_profile
from facultyeval.models import Profile
from facultyeval.models.evaluation import EVALUATION_SUBMITTED
from facultyeval.models.period import PERIOD_OPEN

router = APIRouter(prefix="/evaluator", tags=["evaluator"])


def assignment_to_dict(v: AssignmentView) -> Dict[str, Any]:
    a = v.assignment
    return {
        "id": a.id,
        "period_id": a.period_id,
        "faculty_id": a.faculty_id,
        "evaluator_id": a.evaluator_id,
        "section_id": a.section_id,
        "role": a.role,
        "created_at": a.created_at,
        "period": v.period.model_dump(include={"id", "name", "status", "start_date", "end_date"})
        if v.period else None,
        "faculty": v.faculty.model_dump(include={"id", "full_name", "email"}) if v.faculty else None,
        "evaluator": v.evaluator.model_dump(include={"id", "full_name", "email"}) if v.evaluator else None,
        "section": {
            "id": v.section.id,
            "term": v.section.term,
            "course": {"code": v.course.code, "title": v.course.title} if v.course else None,
        } if v.section else None,
        "evaluation": v.evaluation.model_dump(
            include={"id", "status", "submitted_at", "overall_comment"}
        ) if v.evaluation else None,
    }


@router.get("/assignments")
def my_assignments(
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    views = list_assignments(session, evaluator_id=profile.id)

    open_ids = [v.assignment.id for v in views if v.period and v.period.status == PERIOD_OPEN]
    completed_ids = [
        v.assignment.id for v in views
        if v.evaluation and v.evaluation.status == EVALUATION_SUBMITTED
    ]
    return {
        "ok": True,
        "assignments": [assignment_to_dict(v) for v in views],
        "open": open_ids,
        "completed": completed_ids,
    }
