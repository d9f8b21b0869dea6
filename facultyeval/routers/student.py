# facultyeval/routers/student.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from facultyeval.core import directory, periods
from facultyeval.core.db import get_session
from facultyeval.core.security import get_current_profile
from facultyeval.models import Profile
from facultyeval.schemas.student import SentimentIn

router = APIRouter(prefix="/student", tags=["student"])


@router.get("/periods")
def open_periods(
    _: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    return {
        "ok": True,
        "items": [{"id": p.id, "name": p.name} for p in periods.list_open_periods(session)],
    }


@router.get("/sections")
def section_options(
    _: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    items = []
    for s in directory.list_sections(session, limit=50):
        course = f"{s['course']['code']} {s['course']['title']}" if s["course"] else "Section"
        term = f" • {s['term']}" if s["term"] else ""
        schedule = f" • {s['schedule']}" if s["schedule"] else ""
        items.append({
            "id": s["id"],
            "label": f"{course}{term}{schedule}",
            "facultyId": s["faculty"]["id"] if s["faculty"] else None,
        })
    return {"ok": True, "items": items}


@router.post("/sentiments")
def submit_sentiment(
    payload: SentimentIn,
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    row = directory.record_sentiment(
        session,
        student_id=profile.id,
        comments=payload.comments,
        sentiment=payload.sentiment,
        period_id=payload.periodId,
        section_id=payload.sectionId,
    )
    return {"ok": True, "id": row.id, "message": "Feedback saved."}
