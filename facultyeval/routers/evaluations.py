# facultyeval/routers/evaluations.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlmodel import Session

from facultyeval.core import aggregation
from facultyeval.core.db import get_session
from facultyeval.core.errors import InvalidRequest, NotFound, PermissionDenied
from facultyeval.core.security import get_current_profile
from facultyeval.core.submission import submit, submit_for_section
from facultyeval.models import Evaluation, EvaluatorAssignment, Profile
from facultyeval.schemas.evaluation import (
    CategoryAveragesOut,
    StudentEvaluationIn,
    SubmitEvaluationIn,
    SubmitEvaluationOut,
)

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


@router.post("", response_model=SubmitEvaluationOut)
def submit_evaluation(
    payload: SubmitEvaluationIn,
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    """
    Body:
      {
        "assignmentId": "<uuid>",
        "periodId": "<uuid>",
        "overallComment": "...",
        "responses": {"<rubric item id>": 4, ...}
      }
    Creates or replaces the caller's evaluation for the assignment.
    """
    if not payload.assignmentId or not payload.responses:
        raise InvalidRequest("Missing required fields")

    result = submit(
        session,
        evaluator_id=profile.id,
        assignment_id=payload.assignmentId,
        responses=payload.responses,
        overall_comment=payload.overallComment,
        period_id=payload.periodId,
    )
    return SubmitEvaluationOut(evaluationId=result.evaluation_id)


@router.post("/student", response_model=SubmitEvaluationOut)
def submit_student_evaluation(
    payload: StudentEvaluationIn,
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    if not payload.periodId or not payload.sectionId or not payload.responses:
        raise InvalidRequest("Missing required fields")

    result = submit_for_section(
        session,
        student_id=profile.id,
        period_id=payload.periodId,
        section_id=payload.sectionId,
        responses=payload.responses,
        overall_comment=payload.overallComment,
    )
    return SubmitEvaluationOut(evaluationId=result.evaluation_id)


@router.get("/{evaluation_id}/averages", response_model=CategoryAveragesOut)
def evaluation_averages(
    evaluation_id: str,
    profile: Profile = Depends(get_current_profile),
    session: Session = Depends(get_session),
):
    evaluation = session.get(Evaluation, evaluation_id)
    if evaluation is None:
        raise NotFound("Evaluation not found")
    assignment = session.get(EvaluatorAssignment, evaluation.assignment_id)
    allowed = profile.role == "admin" or (
        assignment is not None and profile.id in (assignment.evaluator_id, assignment.faculty_id)
    )
    if not allowed:
        raise PermissionDenied("You don't have permission to view this evaluation")

    return CategoryAveragesOut(
        evaluationId=evaluation_id,
        averages=aggregation.category_averages(session, evaluation_id),
    )
