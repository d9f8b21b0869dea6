# facultyeval/routers/admin.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from facultyeval.core import aggregation, assignments, directory, periods, rubric
from facultyeval.core.db import get_session
from facultyeval.core.security import require_admin
from facultyeval.core.tokens import make_token
from facultyeval.routers.evaluator import assignment_to_dict
from facultyeval.routers.rubric import categories_out
from facultyeval.schemas.admin import (
    AssignmentIn,
    CategoryIn,
    CourseIn,
    ItemIn,
    PeriodIn,
    PeriodStatusIn,
    SectionIn,
    UserIn,
)

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

# ---------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------
@router.get("/periods")
def list_periods(session: Session = Depends(get_session)):
    return {"ok": True, "items": periods.list_periods(session)}


@router.post("/periods")
def create_period(payload: PeriodIn, session: Session = Depends(get_session)):
    period = periods.create_period(
        session, payload.name, payload.status, payload.start_date, payload.end_date
    )
    return {"ok": True, "period": period}


@router.patch("/periods/{period_id}")
def update_period_status(period_id: str, payload: PeriodStatusIn, session: Session = Depends(get_session)):
    return {"ok": True, "period": periods.update_status(session, period_id, payload.status)}


@router.delete("/periods/{period_id}")
def delete_period(period_id: str, session: Session = Depends(get_session)):
    periods.delete_period(session, period_id)
    return {"ok": True}


# ---------------------------------------------------------------------
# Rubric
# ---------------------------------------------------------------------
@router.get("/rubric")
def list_rubric(session: Session = Depends(get_session)):
    return {"ok": True, "categories": categories_out(session)}


@router.post("/rubric/categories")
def create_category(payload: CategoryIn, session: Session = Depends(get_session)):
    return {"ok": True, "category": rubric.create_category(session, payload.label, payload.description)}


@router.delete("/rubric/categories/{category_id}")
def delete_category(category_id: str, session: Session = Depends(get_session)):
    rubric.delete_category(session, category_id)
    return {"ok": True}


@router.post("/rubric/categories/{category_id}/items")
def add_item(category_id: str, payload: ItemIn, session: Session = Depends(get_session)):
    return {"ok": True, "item": rubric.add_item(session, category_id, payload.prompt, payload.max_score)}


@router.delete("/rubric/items/{item_id}")
def delete_item(item_id: str, session: Session = Depends(get_session)):
    rubric.delete_item(session, item_id)
    return {"ok": True}


# ---------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------
@router.get("/assignments")
def list_assignments(
    limit: int = Query(200, ge=1, le=500),
    session: Session = Depends(get_session),
):
    views = assignments.list_assignments(session, limit=limit)
    return {"ok": True, "items": [assignment_to_dict(v) for v in views]}


@router.post("/assignments")
def create_assignment(payload: AssignmentIn, session: Session = Depends(get_session)):
    a = assignments.create_assignment(
        session,
        period_id=payload.period_id,
        faculty_id=payload.faculty_id,
        evaluator_id=payload.evaluator_id,
        role=payload.role,
        section_id=payload.section_id,
    )
    return {"ok": True, "assignment": a, "message": "Assignment created successfully"}


@router.delete("/assignments/{assignment_id}")
def delete_assignment(assignment_id: str, session: Session = Depends(get_session)):
    assignments.delete_assignment(session, assignment_id)
    return {"ok": True, "message": "Assignment deleted"}


# ---------------------------------------------------------------------
# Users / courses / sections
# ---------------------------------------------------------------------
@router.get("/users")
def list_users(role: Optional[str] = Query(None), session: Session = Depends(get_session)):
    return {"ok": True, "items": directory.list_profiles(session, role=role)}


@router.post("/users")
def create_user(payload: UserIn, session: Session = Depends(get_session)):
    profile = directory.create_profile(
        session,
        email=payload.email,
        full_name=payload.full_name,
        role=payload.role,
        department_id=payload.department_id,
    )
    return {"ok": True, "userId": profile.id, "token": make_token(profile.id)}


@router.get("/courses")
def list_courses(session: Session = Depends(get_session)):
    return {"ok": True, "items": directory.list_courses(session)}


@router.post("/courses")
def create_course(payload: CourseIn, session: Session = Depends(get_session)):
    return {"ok": True, "course": directory.create_course(session, payload.code, payload.title)}


@router.get("/sections")
def list_sections(session: Session = Depends(get_session)):
    return {"ok": True, "items": directory.list_sections(session)}


@router.post("/sections")
def create_section(payload: SectionIn, session: Session = Depends(get_session)):
    section = directory.create_section(
        session,
        course_id=payload.course_id,
        faculty_id=payload.faculty_id,
        term=payload.term,
        academic_year=payload.academic_year,
        schedule=payload.schedule,
    )
    return {"ok": True, "section": section, "message": "Section added."}


# ---------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------
@router.get("/metrics")
def admin_metrics(session: Session = Depends(get_session)):
    return {"ok": True, **directory.metrics(session)}


@router.get("/section-scores")
def section_scores(
    period_id: Optional[str] = Query(None),
    session: Session = Depends(get_session),
):
    scores = aggregation.section_averages(session, period_id=period_id)
    return {
        "ok": True,
        "items": [
            {
                "sectionId": s.section_id,
                "courseLabel": s.course_label,
                "facultyName": s.faculty_name,
                "term": s.term,
                "schedule": s.schedule,
                "average": s.average,
                "responses": s.responses,
            }
            for s in scores
        ],
    }
