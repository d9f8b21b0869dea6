# facultyeval/models/rubric.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel, Field

from facultyeval.models.base import new_id, utcnow

DEFAULT_MAX_SCORE = 5


class RubricCategory(SQLModel, table=True):
    __tablename__ = "rubric_categories"

    id: str = Field(default_factory=new_id, primary_key=True)
    label: str
    description: Optional[str] = None
    order_index: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=utcnow)


class RubricItem(SQLModel, table=True):
    __tablename__ = "rubric_items"

    id: str = Field(default_factory=new_id, primary_key=True)
    category_id: str = Field(foreign_key="rubric_categories.id", ondelete="CASCADE", index=True)
    prompt: str
    max_score: int = DEFAULT_MAX_SCORE
    order_index: int = 0
    created_at: datetime = Field(default_factory=utcnow)
