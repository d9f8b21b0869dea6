# facultyeval/core/assignments.py
"""
Assignment resolver: decides whether an evaluator may submit for a
faculty member in a period (and optionally a section).

Authorization is an explicit lookup here. "Row does not exist" and
"row exists but belongs to someone else" are the same answer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from sqlmodel import Session, select

from facultyeval.core.app_logger import get_logger
from facultyeval.core.db import store_errors
from facultyeval.core.errors import InvalidRequest, NotFound, PermissionDenied
from facultyeval.models import (
    Course,
    Evaluation,
    EvaluationPeriod,
    EvaluatorAssignment,
    Profile,
    Section,
)
from facultyeval.models.assignment import EVALUATION_ROLES
from facultyeval.models.period import PERIOD_OPEN

log = get_logger("assignments")


def find_assignment(
    session: Session,
    evaluator_id: str,
    period_id: str,
    section_id: Optional[str] = None,
    faculty_id: Optional[str] = None,
) -> Optional[EvaluatorAssignment]:
    q = select(EvaluatorAssignment).where(
        EvaluatorAssignment.evaluator_id == evaluator_id,
        EvaluatorAssignment.period_id == period_id,
    )
    if section_id is not None:
        q = q.where(EvaluatorAssignment.section_id == section_id)
    if faculty_id is not None:
        q = q.where(EvaluatorAssignment.faculty_id == faculty_id)

    with store_errors(session, "find assignment"):
        return session.exec(q.order_by(EvaluatorAssignment.created_at)).first()


def get_owned_assignment(session: Session, evaluator_id: str, assignment_id: str) -> EvaluatorAssignment:
    with store_errors(session, "load assignment"):
        assignment = session.exec(
            select(EvaluatorAssignment).where(
                EvaluatorAssignment.id == assignment_id,
                EvaluatorAssignment.evaluator_id == evaluator_id,
            )
        ).first()
    if assignment is None:
        raise PermissionDenied()
    return assignment


def is_period_open(session: Session, period_id: str) -> bool:
    with store_errors(session, "load period"):
        period = session.get(EvaluationPeriod, period_id)
    return period is not None and period.status == PERIOD_OPEN


# ---------------------------------------------------------------------
# Joined view (one fixed shape for every caller)
# ---------------------------------------------------------------------
@dataclass
class AssignmentView:
    assignment: EvaluatorAssignment
    period: Optional[EvaluationPeriod]
    faculty: Optional[Profile]
    evaluator: Optional[Profile]
    section: Optional[Section]
    course: Optional[Course]
    evaluation: Optional[Evaluation]


def _by_id(session: Session, model, ids) -> Dict[str, object]:
    ids = {i for i in ids if i}
    if not ids:
        return {}
    return {row.id: row for row in session.exec(select(model).where(model.id.in_(ids))).all()}


def list_assignments(
    session: Session,
    evaluator_id: Optional[str] = None,
    limit: int = 200,
) -> List[AssignmentView]:
    q = select(EvaluatorAssignment)
    if evaluator_id is not None:
        q = q.where(EvaluatorAssignment.evaluator_id == evaluator_id)
    q = q.order_by(EvaluatorAssignment.created_at.desc()).limit(limit)

    with store_errors(session, "list assignments"):
        rows = session.exec(q).all()
        periods = _by_id(session, EvaluationPeriod, (a.period_id for a in rows))
        profiles = _by_id(session, Profile, [a.faculty_id for a in rows] + [a.evaluator_id for a in rows])
        sections = _by_id(session, Section, (a.section_id for a in rows))
        courses = _by_id(session, Course, (s.course_id for s in sections.values()))
        evaluations: Dict[str, Evaluation] = {}
        if rows:
            for ev in session.exec(
                select(Evaluation).where(Evaluation.assignment_id.in_([a.id for a in rows]))
            ).all():
                evaluations[ev.assignment_id] = ev

    out: List[AssignmentView] = []
    for a in rows:
        section = sections.get(a.section_id) if a.section_id else None
        out.append(AssignmentView(
            assignment=a,
            period=periods.get(a.period_id),
            faculty=profiles.get(a.faculty_id),
            evaluator=profiles.get(a.evaluator_id),
            section=section,
            course=courses.get(section.course_id) if section else None,
            evaluation=evaluations.get(a.id),
        ))
    return out


# ---------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------
def create_assignment(
    session: Session,
    period_id: str,
    faculty_id: str,
    evaluator_id: str,
    role: str = "peer",
    section_id: Optional[str] = None,
) -> EvaluatorAssignment:
    if not period_id or not faculty_id or not evaluator_id:
        raise InvalidRequest("Please select period, faculty, and evaluator")
    if role not in EVALUATION_ROLES:
        raise InvalidRequest(f"role must be one of {', '.join(EVALUATION_ROLES)}")

    with store_errors(session, "create assignment"):
        if session.get(EvaluationPeriod, period_id) is None:
            raise InvalidRequest("Unknown evaluation period")
        for pid in (faculty_id, evaluator_id):
            if session.get(Profile, pid) is None:
                raise InvalidRequest(f"Unknown profile {pid}")
        if section_id and session.get(Section, section_id) is None:
            raise InvalidRequest("Unknown section")

        assignment = EvaluatorAssignment(
            period_id=period_id,
            faculty_id=faculty_id,
            evaluator_id=evaluator_id,
            role=role,
            section_id=section_id or None,
        )
        session.add(assignment)
        session.commit()
        session.refresh(assignment)

    log.info(
        "assignment created id=%s evaluator=%s faculty=%s role=%s",
        assignment.id, evaluator_id, faculty_id, role,
    )
    return assignment


def delete_assignment(session: Session, assignment_id: str) -> None:
    assignment = session.get(EvaluatorAssignment, assignment_id)
    if assignment is None:
        raise NotFound("Assignment not found")
    with store_errors(session, "delete assignment"):
        session.delete(assignment)
        session.commit()
    log.info("assignment deleted id=%s", assignment_id)
