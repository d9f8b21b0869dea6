# facultyeval/routers/rubric.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from facultyeval.core import rubric
from facultyeval.core.db import get_session
from facultyeval.core.security import get_current_profile
from facultyeval.schemas.evaluation import RubricCategoryOut, RubricItemOut

router = APIRouter(prefix="/rubric", tags=["rubric"], dependencies=[Depends(get_current_profile)])


def categories_out(session: Session) -> list[RubricCategoryOut]:
    return [
        RubricCategoryOut(
            id=c.category.id,
            label=c.category.label,
            description=c.category.description,
            order_index=c.category.order_index,
            rubric_items=[
                RubricItemOut(id=i.id, prompt=i.prompt, max_score=i.max_score, order_index=i.order_index)
                for i in c.items
            ],
        )
        for c in rubric.list_categories(session)
    ]


@router.get("")
def get_rubric(session: Session = Depends(get_session)):
    categories = categories_out(session)
    return {
        "ok": True,
        "categories": categories,
        "total_items": sum(len(c.rubric_items) for c in categories),
    }
