# facultyeval/schemas/admin.py
from datetime import date
from pydantic import BaseModel
from typing import Optional


class PeriodIn(BaseModel):
    name: str
    status: str = "draft"
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class PeriodStatusIn(BaseModel):
    status: str


class CategoryIn(BaseModel):
    label: str
    description: Optional[str] = None


class ItemIn(BaseModel):
    prompt: str
    max_score: int = 5


class AssignmentIn(BaseModel):
    period_id: str
    faculty_id: str
    evaluator_id: str
    role: str = "peer"
    section_id: Optional[str] = None


class UserIn(BaseModel):
    email: str
    full_name: Optional[str] = None
    role: str = "faculty"
    department_id: Optional[str] = None


class CourseIn(BaseModel):
    code: str
    title: str


class SectionIn(BaseModel):
    course_id: str
    faculty_id: str
    term: Optional[str] = None
    academic_year: Optional[str] = None
    schedule: Optional[str] = None
