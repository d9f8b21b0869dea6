# facultyeval/core/aggregation.py
"""
Display-only score summaries. Always derived from stored responses,
never written back.
"""
from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Dict, List, Optional

from sqlmodel import Session, select, func

from facultyeval.core.db import store_errors
from facultyeval.models import (
    Course,
    Evaluation,
    EvaluationResponse,
    EvaluatorAssignment,
    Profile,
    RubricCategory,
    RubricItem,
    Section,
)
from facultyeval.models.evaluation import EVALUATION_SUBMITTED


def _round2(values: List[float]) -> Optional[float]:
    return round(mean(values), 2) if values else None


def count_responses(session: Session, evaluation_id: str) -> int:
    with store_errors(session, "count responses"):
        return session.exec(
            select(func.count())
            .select_from(EvaluationResponse)
            .where(EvaluationResponse.evaluation_id == evaluation_id)
        ).one()


def category_averages(session: Session, evaluation_id: str) -> Dict[str, float]:
    """
    Mean score per category label for one evaluation, rounded to 2 places.
    Categories without responses are left out. Keys follow rubric order.
    """
    with store_errors(session, "category averages"):
        rows = session.exec(
            select(RubricCategory.id, RubricCategory.label, EvaluationResponse.score)
            .select_from(EvaluationResponse)
            .join(RubricItem, RubricItem.id == EvaluationResponse.rubric_item_id)
            .join(RubricCategory, RubricCategory.id == RubricItem.category_id)
            .where(EvaluationResponse.evaluation_id == evaluation_id)
            .order_by(RubricCategory.order_index, RubricCategory.created_at, RubricCategory.id)
        ).all()

    labels: Dict[str, str] = {}
    scores: Dict[str, List[float]] = {}
    for cat_id, label, score in rows:
        labels[cat_id] = label
        scores.setdefault(cat_id, []).append(float(score))

    out: Dict[str, float] = {}
    for cat_id, vals in scores.items():
        # create_category keeps labels unique; a duplicate written directly overwrites
        out[labels[cat_id]] = _round2(vals)
    return out


@dataclass
class SectionScore:
    section_id: str
    course_label: str
    faculty_name: str
    term: str
    schedule: str
    average: float
    responses: int


def section_averages(session: Session, period_id: Optional[str] = None) -> List[SectionScore]:
    """
    Mean of every response score across submitted evaluations per section,
    highest average first. Sections with no responses are left out.
    """
    q = (
        select(EvaluatorAssignment.section_id, EvaluationResponse.score)
        .select_from(EvaluatorAssignment)
        .join(Evaluation, Evaluation.assignment_id == EvaluatorAssignment.id)
        .join(EvaluationResponse, EvaluationResponse.evaluation_id == Evaluation.id)
        .where(
            EvaluatorAssignment.section_id.is_not(None),
            Evaluation.status == EVALUATION_SUBMITTED,
        )
    )
    if period_id is not None:
        q = q.where(EvaluatorAssignment.period_id == period_id)

    with store_errors(session, "section averages"):
        rows = session.exec(q).all()
        per_section: Dict[str, List[float]] = {}
        for section_id, score in rows:
            per_section.setdefault(section_id, []).append(float(score))

        sections = {}
        courses = {}
        faculty = {}
        if per_section:
            sections = {
                s.id: s for s in session.exec(select(Section).where(Section.id.in_(list(per_section)))).all()
            }
            course_ids = {s.course_id for s in sections.values()}
            faculty_ids = {s.faculty_id for s in sections.values() if s.faculty_id}
            if course_ids:
                courses = {c.id: c for c in session.exec(select(Course).where(Course.id.in_(course_ids))).all()}
            if faculty_ids:
                faculty = {p.id: p for p in session.exec(select(Profile).where(Profile.id.in_(faculty_ids))).all()}

    out: List[SectionScore] = []
    for section_id, vals in per_section.items():
        section = sections.get(section_id)
        course = courses.get(section.course_id) if section else None
        prof = faculty.get(section.faculty_id) if section and section.faculty_id else None
        out.append(SectionScore(
            section_id=section_id,
            course_label=f"{course.code} {course.title}" if course else "Section",
            faculty_name=(prof.full_name or prof.email) if prof else "",
            term=" ".join(p for p in ((section.term if section else None),
                                      (section.academic_year if section else None)) if p),
            schedule=(section.schedule or "") if section else "",
            average=_round2(vals),
            responses=len(vals),
        ))

    out.sort(key=lambda s: (-s.average, s.course_label, s.section_id))
    return out
