# facultyeval/core/submission.py
"""
Evaluation submission pipeline.

submit() is the single entry point that turns a caller's score map into
stored state:

    1. the assignment must belong to the caller        -> PermissionDenied
    2. the assignment's period must be ``open``         -> PeriodClosed
    3. every current rubric item must be scored         -> IncompleteSubmission
       and every score must be an integer in [1, max]   -> InvalidScore
    4. create or update the single Evaluation row for the assignment
    5. replace its whole response set

Steps 1-3 finish before anything is written. Steps 4-5 share one
transaction, so a failure leaves the previous state untouched.
"""
from __future__ import annotations

from dataclasses import dataclass
from numbers import Number
from typing import Any, Dict, Mapping, Optional, Tuple

from sqlmodel import Session, select

from facultyeval.core import rubric
from facultyeval.core.app_logger import get_logger
from facultyeval.core.assignments import find_assignment, get_owned_assignment, is_period_open
from facultyeval.core.db import store_errors
from facultyeval.core.errors import (
    EvaluationError,
    IncompleteSubmission,
    InvalidRequest,
    InvalidScore,
    PeriodClosed,
    PermissionDenied,
)
from facultyeval.models import Evaluation, EvaluationResponse, RubricItem
from facultyeval.models.base import utcnow
from facultyeval.models.evaluation import EVALUATION_SUBMITTED

log = get_logger("submission")

# item id -> (score, comment)
ScoredItems = Dict[str, Tuple[int, Optional[str]]]


@dataclass
class SubmissionResult:
    evaluation_id: str
    response_count: int
    created: bool


def _as_score(raw: Any) -> Optional[int]:
    if isinstance(raw, bool) or not isinstance(raw, Number):
        return None
    if isinstance(raw, int):
        return raw
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    if not value.is_integer():
        return None
    return int(value)


def validate_responses(items: Mapping[str, RubricItem], responses: Mapping[str, Any]) -> ScoredItems:
    """
    Check a response map against the rubric items in effect.

    A value is either a bare score or ``{"score": n, "comment": "..."}``.
    """
    missing = [item_id for item_id in items if item_id not in responses]
    if missing:
        raise IncompleteSubmission(missing=len(missing), total=len(items))

    scored: ScoredItems = {}
    for item_id, raw in responses.items():
        item = items.get(item_id)
        if item is None:
            raise InvalidScore(f"Unknown rubric item {item_id}")

        comment = None
        if isinstance(raw, Mapping):
            comment = raw.get("comment")
            if comment is not None and not isinstance(comment, str):
                raise InvalidRequest(f"Comment for item {item_id} must be text")
            comment = comment or None
            raw = raw.get("score")

        score = _as_score(raw)
        if score is None or not 1 <= score <= item.max_score:
            raise InvalidScore(
                f"Score for item {item_id} must be a whole number between 1 and {item.max_score}"
            )
        scored[item_id] = (score, comment)
    return scored


def submit(
    session: Session,
    evaluator_id: str,
    assignment_id: str,
    responses: Mapping[str, Any],
    overall_comment: Optional[str] = None,
    period_id: Optional[str] = None,
) -> SubmissionResult:
    try:
        assignment = get_owned_assignment(session, evaluator_id, assignment_id)
        if period_id and period_id != assignment.period_id:
            raise PermissionDenied()
        if not is_period_open(session, assignment.period_id):
            raise PeriodClosed()
        scored = validate_responses(rubric.items_by_id(session), responses)
    except EvaluationError as e:
        log.warning(
            "submission rejected assignment=%s evaluator=%s: %s (%s)",
            assignment_id, evaluator_id, e.code, e.message,
        )
        raise

    now = utcnow()
    with store_errors(session, "submit evaluation"):
        evaluation = session.exec(
            select(Evaluation).where(Evaluation.assignment_id == assignment.id)
        ).first()
        created = evaluation is None
        if created:
            evaluation = Evaluation(assignment_id=assignment.id)
        else:
            for old in session.exec(
                select(EvaluationResponse).where(EvaluationResponse.evaluation_id == evaluation.id)
            ).all():
                session.delete(old)

        evaluation.status = EVALUATION_SUBMITTED
        evaluation.submitted_at = now
        evaluation.overall_comment = overall_comment
        session.add(evaluation)
        # deletes must reach the store before the new rows (unique evaluation/item)
        session.flush()

        for item_id, (score, comment) in scored.items():
            session.add(EvaluationResponse(
                evaluation_id=evaluation.id,
                rubric_item_id=item_id,
                score=score,
                comment=comment,
            ))
        session.commit()
        session.refresh(evaluation)

    log.info(
        "evaluation %s id=%s assignment=%s responses=%d",
        "created" if created else "resubmitted", evaluation.id, assignment.id, len(scored),
    )
    return SubmissionResult(evaluation_id=evaluation.id, response_count=len(scored), created=created)


def submit_for_section(
    session: Session,
    student_id: str,
    period_id: str,
    section_id: str,
    responses: Mapping[str, Any],
    overall_comment: Optional[str] = None,
) -> SubmissionResult:
    """Student flow: the assignment must already exist for period + section."""
    assignment = find_assignment(session, student_id, period_id, section_id=section_id)
    if assignment is None:
        log.warning(
            "student submission rejected student=%s period=%s section=%s: no assignment",
            student_id, period_id, section_id,
        )
        raise PermissionDenied()
    return submit(session, student_id, assignment.id, responses, overall_comment)
