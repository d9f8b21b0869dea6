# facultyeval/core/periods.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlmodel import Session, select

from facultyeval.core.app_logger import get_logger
from facultyeval.core.db import store_errors
from facultyeval.core.errors import InvalidRequest, NotFound
from facultyeval.models import EvaluationPeriod
from facultyeval.models.period import PERIOD_OPEN, PERIOD_STATUSES

log = get_logger("periods")


def _check_status(status: str) -> str:
    if status not in PERIOD_STATUSES:
        raise InvalidRequest(f"status must be one of {', '.join(PERIOD_STATUSES)}")
    return status


def create_period(
    session: Session,
    name: str,
    status: str = "draft",
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> EvaluationPeriod:
    name = (name or "").strip()
    if not name:
        raise InvalidRequest("Period name is required")
    period = EvaluationPeriod(
        name=name, status=_check_status(status), start_date=start_date, end_date=end_date
    )
    with store_errors(session, "create period"):
        session.add(period)
        session.commit()
        session.refresh(period)
    log.info("period created id=%s status=%s", period.id, period.status)
    return period


def list_periods(session: Session, limit: int = 50) -> List[EvaluationPeriod]:
    with store_errors(session, "list periods"):
        return list(session.exec(
            select(EvaluationPeriod)
            .order_by(EvaluationPeriod.start_date.desc(), EvaluationPeriod.created_at.desc())
            .limit(limit)
        ).all())


def list_open_periods(session: Session) -> List[EvaluationPeriod]:
    with store_errors(session, "list open periods"):
        return list(session.exec(
            select(EvaluationPeriod)
            .where(EvaluationPeriod.status == PERIOD_OPEN)
            .order_by(EvaluationPeriod.start_date, EvaluationPeriod.created_at)
        ).all())


def update_status(session: Session, period_id: str, status: str) -> EvaluationPeriod:
    """Admin status change. No ordering is enforced between statuses."""
    period = session.get(EvaluationPeriod, period_id)
    if period is None:
        raise NotFound("Evaluation period not found")
    previous = period.status
    period.status = _check_status(status)
    with store_errors(session, "update period status"):
        session.add(period)
        session.commit()
        session.refresh(period)
    log.info("period %s status %s -> %s", period_id, previous, period.status)
    return period


def delete_period(session: Session, period_id: str) -> None:
    # assignments, evaluations and responses cascade in the store
    period = session.get(EvaluationPeriod, period_id)
    if period is None:
        raise NotFound("Evaluation period not found")
    with store_errors(session, "delete period"):
        session.delete(period)
        session.commit()
    log.info("period deleted id=%s", period_id)
