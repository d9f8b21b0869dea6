# facultyeval/core/rubric.py
"""
Rubric model: the ordered categories -> items -> max score that every
submission is validated against and every average is grouped by.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from sqlmodel import Session, select, func

from facultyeval.core.app_logger import get_logger
from facultyeval.core.db import store_errors
from facultyeval.core.errors import InvalidRequest, NotFound
from facultyeval.models import EvaluationResponse, RubricCategory, RubricItem
from facultyeval.models.rubric import DEFAULT_MAX_SCORE

log = get_logger("rubric")


@dataclass
class CategoryWithItems:
    category: RubricCategory
    items: List[RubricItem] = field(default_factory=list)


def list_categories(session: Session) -> List[CategoryWithItems]:
    with store_errors(session, "list rubric"):
        cats = session.exec(
            select(RubricCategory).order_by(
                RubricCategory.order_index, RubricCategory.created_at, RubricCategory.id
            )
        ).all()
        items = session.exec(
            select(RubricItem).order_by(RubricItem.order_index, RubricItem.created_at, RubricItem.id)
        ).all()

    by_cat: Dict[str, List[RubricItem]] = {}
    for it in items:
        by_cat.setdefault(it.category_id, []).append(it)

    return [CategoryWithItems(category=c, items=by_cat.get(c.id, [])) for c in cats]


def items_by_id(session: Session) -> Dict[str, RubricItem]:
    """Every current rubric item keyed by id."""
    return {it.id: it for cat in list_categories(session) for it in cat.items}


def total_item_count(session: Session) -> int:
    with store_errors(session, "count rubric items"):
        return session.exec(select(func.count()).select_from(RubricItem)).one()


# ---------------------------------------------------------------------
# Administration
# ---------------------------------------------------------------------
def create_category(session: Session, label: str, description: str | None = None) -> RubricCategory:
    label = (label or "").strip()
    if not label:
        raise InvalidRequest("Category label is required")

    with store_errors(session, "create rubric category"):
        if session.exec(select(RubricCategory).where(RubricCategory.label == label)).first() is not None:
            raise InvalidRequest(f"A category labelled {label!r} already exists")
        count = session.exec(select(func.count()).select_from(RubricCategory)).one()
        cat = RubricCategory(label=label, description=(description or "").strip() or None, order_index=count)
        session.add(cat)
        session.commit()
        session.refresh(cat)

    log.info("rubric category created id=%s label=%r", cat.id, cat.label)
    return cat


def delete_category(session: Session, category_id: str) -> None:
    cat = session.get(RubricCategory, category_id)
    if cat is None:
        raise NotFound("Rubric category not found")

    with store_errors(session, "delete rubric category"):
        item_ids = session.exec(select(RubricItem.id).where(RubricItem.category_id == category_id)).all()
        _delete_items(session, list(item_ids))
        session.delete(cat)
        session.commit()

    log.info("rubric category deleted id=%s items=%d", category_id, len(item_ids))


def add_item(
    session: Session,
    category_id: str,
    prompt: str,
    max_score: int = DEFAULT_MAX_SCORE,
) -> RubricItem:
    prompt = (prompt or "").strip()
    if not prompt:
        raise InvalidRequest("Item prompt is required")
    if isinstance(max_score, bool) or not isinstance(max_score, int) or max_score < 1:
        raise InvalidRequest("max_score must be a positive integer")
    if session.get(RubricCategory, category_id) is None:
        raise NotFound("Rubric category not found")

    with store_errors(session, "add rubric item"):
        count = session.exec(
            select(func.count()).select_from(RubricItem).where(RubricItem.category_id == category_id)
        ).one()
        item = RubricItem(category_id=category_id, prompt=prompt, max_score=max_score, order_index=count + 1)
        session.add(item)
        session.commit()
        session.refresh(item)

    log.info("rubric item added id=%s category=%s", item.id, category_id)
    return item


def delete_item(session: Session, item_id: str) -> None:
    if session.get(RubricItem, item_id) is None:
        raise NotFound("Rubric item not found")

    with store_errors(session, "delete rubric item"):
        _delete_items(session, [item_id])
        session.commit()


def _delete_items(session: Session, item_ids: List[str]) -> None:
    # stored responses for removed items go with them
    if not item_ids:
        return
    for resp in session.exec(
        select(EvaluationResponse).where(EvaluationResponse.rubric_item_id.in_(item_ids))
    ).all():
        session.delete(resp)
    for item in session.exec(select(RubricItem).where(RubricItem.id.in_(item_ids))).all():
        session.delete(item)
    session.flush()
