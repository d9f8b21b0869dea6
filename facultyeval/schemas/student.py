# facultyeval/schemas/student.py
from pydantic import BaseModel
from typing import Optional


class SentimentIn(BaseModel):
    periodId: Optional[str] = None
    sectionId: Optional[str] = None
    sentiment: str = "positive"
    comments: str
