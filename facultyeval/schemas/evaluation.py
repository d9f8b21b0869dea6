# facultyeval/schemas/evaluation.py
from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class SubmitEvaluationIn(BaseModel):
    assignmentId: str
    periodId: Optional[str] = None
    overallComment: Optional[str] = None
    # item id -> score, or item id -> {"score": n, "comment": "..."}
    responses: Dict[str, Any]


class StudentEvaluationIn(BaseModel):
    periodId: str
    sectionId: str
    overallComment: Optional[str] = None
    responses: Dict[str, Any]


class SubmitEvaluationOut(BaseModel):
    success: bool = True
    evaluationId: str


class RubricItemOut(BaseModel):
    id: str
    prompt: str
    max_score: int
    order_index: int


class RubricCategoryOut(BaseModel):
    id: str
    label: str
    description: Optional[str] = None
    order_index: int
    rubric_items: List[RubricItemOut] = []


class CategoryAveragesOut(BaseModel):
    evaluationId: str
    averages: Dict[str, float]
