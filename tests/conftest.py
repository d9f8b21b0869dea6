# tests/conftest.py
from __future__ import annotations

import os

# Must be set before the app modules read settings
os.environ.setdefault("SESSION_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from facultyeval.core import rubric
from facultyeval.core.db import build_engine, get_session, init_db
from facultyeval.core.tokens import make_token
from facultyeval.main import app
from facultyeval.models import (
    Course,
    EvaluationPeriod,
    EvaluatorAssignment,
    Profile,
    RubricItem,
    Section,
)


@pytest.fixture()
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture()
def client(session):
    app.dependency_overrides[get_session] = lambda: session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


class Factory:
    """Row builders shared by the tests."""

    def __init__(self, session: Session):
        self.session = session
        self._n = 0

    def _save(self, row):
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def profile(self, role: str = "faculty", name: Optional[str] = None) -> Profile:
        self._n += 1
        return self._save(Profile(
            email=f"{role}{self._n}@example.edu",
            full_name=name or f"{role.title()} {self._n}",
            role=role,
        ))

    def period(self, status: str = "open", name: str = "Fall 2026") -> EvaluationPeriod:
        return self._save(EvaluationPeriod(name=name, status=status, start_date=date(2026, 9, 1)))

    def section(self, faculty: Profile, code: Optional[str] = None, title: str = "Intro") -> Section:
        self._n += 1
        course = self._save(Course(code=code or f"CS{100 + self._n}", title=title))
        return self._save(Section(course_id=course.id, faculty_id=faculty.id, term="Fall", schedule="MWF 9:00"))

    def assignment(
        self,
        period: EvaluationPeriod,
        evaluator: Profile,
        faculty: Profile,
        role: str = "peer",
        section: Optional[Section] = None,
    ) -> EvaluatorAssignment:
        return self._save(EvaluatorAssignment(
            period_id=period.id,
            faculty_id=faculty.id,
            evaluator_id=evaluator.id,
            role=role,
            section_id=section.id if section else None,
        ))

    def rubric(self, layout: Dict[str, List[int]]) -> Dict[str, List[RubricItem]]:
        """{"Teaching": [5, 5]} -> one category with two items of max 5."""
        out: Dict[str, List[RubricItem]] = {}
        for label, maxes in layout.items():
            cat = rubric.create_category(self.session, label)
            out[label] = [
                rubric.add_item(self.session, cat.id, f"{label} item {i + 1}", max_score=m)
                for i, m in enumerate(maxes)
            ]
        return out


@pytest.fixture()
def factory(session):
    return Factory(session)


@pytest.fixture()
def auth():
    def _headers(profile: Profile) -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(profile.id)}"}
    return _headers
