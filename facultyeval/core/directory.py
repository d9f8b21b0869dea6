# facultyeval/core/directory.py
from __future__ import annotations

from typing import Dict, List, Optional

from sqlmodel import Session, select, func

from facultyeval.core.app_logger import get_logger
from facultyeval.core.db import store_errors
from facultyeval.core.errors import InvalidRequest
from facultyeval.models import (
    Course,
    EvaluationPeriod,
    Profile,
    RubricItem,
    Section,
    StudentSentiment,
)
from facultyeval.models.directory import PROFILE_ROLES
from facultyeval.models.sentiment import SENTIMENTS

log = get_logger("directory")


def _clean(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


# ---------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------
def create_profile(
    session: Session,
    email: str,
    full_name: Optional[str] = None,
    role: str = "faculty",
    department_id: Optional[str] = None,
) -> Profile:
    email = _clean(email)
    if not email:
        raise InvalidRequest("Email is required.")
    if not _clean(full_name):
        raise InvalidRequest("Name is required.")
    role = role or "faculty"
    if role not in PROFILE_ROLES:
        raise InvalidRequest(f"role must be one of {', '.join(PROFILE_ROLES)}")

    with store_errors(session, "create user"):
        if session.exec(select(Profile).where(Profile.email == email)).first() is not None:
            raise InvalidRequest(f"A user with email {email} already exists.")
        profile = Profile(email=email, full_name=_clean(full_name), role=role, department_id=_clean(department_id))
        session.add(profile)
        session.commit()
        session.refresh(profile)

    log.info("profile created id=%s role=%s", profile.id, profile.role)
    return profile


def list_profiles(session: Session, role: Optional[str] = None, limit: int = 100) -> List[Profile]:
    q = select(Profile)
    if role:
        q = q.where(Profile.role == role)
    with store_errors(session, "list users"):
        return list(session.exec(q.order_by(Profile.full_name, Profile.email).limit(limit)).all())


# ---------------------------------------------------------------------
# Courses / sections
# ---------------------------------------------------------------------
def create_course(session: Session, code: str, title: str) -> Course:
    code, title = _clean(code), _clean(title)
    if not code or not title:
        raise InvalidRequest("Course code and title are required.")
    with store_errors(session, "create course"):
        if session.exec(select(Course).where(Course.code == code)).first() is not None:
            raise InvalidRequest(f"Course {code} already exists.")
        course = Course(code=code, title=title)
        session.add(course)
        session.commit()
        session.refresh(course)
    return course


def list_courses(session: Session, limit: int = 100) -> List[Course]:
    with store_errors(session, "list courses"):
        return list(session.exec(select(Course).order_by(Course.code).limit(limit)).all())


def create_section(
    session: Session,
    course_id: str,
    faculty_id: str,
    term: Optional[str] = None,
    academic_year: Optional[str] = None,
    schedule: Optional[str] = None,
) -> Section:
    if not course_id or not faculty_id:
        raise InvalidRequest("Course and faculty are required.")
    with store_errors(session, "create section"):
        if session.get(Course, course_id) is None:
            raise InvalidRequest("Unknown course")
        if session.get(Profile, faculty_id) is None:
            raise InvalidRequest("Unknown faculty")
        section = Section(
            course_id=course_id,
            faculty_id=faculty_id,
            term=_clean(term),
            academic_year=_clean(academic_year),
            schedule=_clean(schedule),
        )
        session.add(section)
        session.commit()
        session.refresh(section)
    log.info("section created id=%s course=%s faculty=%s", section.id, course_id, faculty_id)
    return section


def list_sections(session: Session, faculty_id: Optional[str] = None, limit: int = 100) -> List[Dict]:
    """Sections joined with course code/title and faculty name."""
    q = (
        select(Section, Course, Profile)
        .select_from(Section)
        .join(Course, Course.id == Section.course_id)
        .join(Profile, Profile.id == Section.faculty_id, isouter=True)
    )
    if faculty_id:
        q = q.where(Section.faculty_id == faculty_id)
    with store_errors(session, "list sections"):
        rows = session.exec(q.order_by(Section.created_at.desc()).limit(limit)).all()

    return [
        {
            "id": s.id,
            "term": s.term,
            "academic_year": s.academic_year,
            "schedule": s.schedule,
            "course": {"code": c.code, "title": c.title},
            "faculty": {"id": p.id, "full_name": p.full_name} if p else None,
        }
        for (s, c, p) in rows
    ]


# ---------------------------------------------------------------------
# Student sentiment
# ---------------------------------------------------------------------
def record_sentiment(
    session: Session,
    student_id: str,
    comments: str,
    sentiment: str = "positive",
    period_id: Optional[str] = None,
    section_id: Optional[str] = None,
) -> StudentSentiment:
    comments = _clean(comments)
    if not comments:
        raise InvalidRequest("comments are required")
    if sentiment not in SENTIMENTS:
        raise InvalidRequest(f"sentiment must be one of {', '.join(SENTIMENTS)}")

    with store_errors(session, "save sentiment"):
        faculty_id = None
        if section_id:
            section = session.get(Section, section_id)
            if section is None:
                raise InvalidRequest("Unknown section")
            faculty_id = section.faculty_id
        if period_id and session.get(EvaluationPeriod, period_id) is None:
            raise InvalidRequest("Unknown evaluation period")

        row = StudentSentiment(
            student_id=student_id,
            period_id=period_id or None,
            section_id=section_id or None,
            faculty_id=faculty_id,
            sentiment=sentiment,
            comments=comments,
        )
        session.add(row)
        session.commit()
        session.refresh(row)
    return row


# ---------------------------------------------------------------------
# Admin metrics
# ---------------------------------------------------------------------
def metrics(session: Session) -> Dict[str, int]:
    def count(model) -> int:
        return session.exec(select(func.count()).select_from(model)).one()

    with store_errors(session, "metrics"):
        return {
            "periods": count(EvaluationPeriod),
            "rubricItems": count(RubricItem),
            "sections": count(Section),
            "sentiments": count(StudentSentiment),
        }
