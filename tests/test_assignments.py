import pytest

from facultyeval.core import assignments, periods
from facultyeval.core.errors import InvalidRequest, PermissionDenied


def test_find_assignment_matches_evaluator_and_period(session, factory):
    period = factory.period()
    other_period = factory.period(name="Spring 2027")
    evaluator, faculty = factory.profile("evaluator"), factory.profile()
    a = factory.assignment(period, evaluator, faculty)

    assert assignments.find_assignment(session, evaluator.id, period.id).id == a.id
    assert assignments.find_assignment(session, evaluator.id, other_period.id) is None
    assert assignments.find_assignment(session, faculty.id, period.id) is None


def test_find_assignment_section_and_faculty_must_match_when_given(session, factory):
    period = factory.period()
    student, faculty, other_faculty = factory.profile("student"), factory.profile(), factory.profile()
    section = factory.section(faculty)
    other_section = factory.section(other_faculty)
    a = factory.assignment(period, student, faculty, role="student", section=section)

    assert assignments.find_assignment(session, student.id, period.id, section_id=section.id).id == a.id
    assert assignments.find_assignment(session, student.id, period.id, section_id=other_section.id) is None
    assert assignments.find_assignment(session, student.id, period.id, faculty_id=faculty.id).id == a.id
    assert assignments.find_assignment(session, student.id, period.id, faculty_id=other_faculty.id) is None


@pytest.mark.parametrize("status,expected", [("open", True), ("draft", False), ("closed", False)])
def test_is_period_open(session, factory, status, expected):
    period = factory.period(status=status)
    assert assignments.is_period_open(session, period.id) is expected


def test_unknown_period_is_not_open(session):
    assert assignments.is_period_open(session, "missing") is False


def test_status_changes_are_unconstrained(session, factory):
    period = factory.period(status="closed")
    for status in ("open", "draft", "closed", "open"):
        assert periods.update_status(session, period.id, status).status == status


def test_owned_assignment_hides_other_evaluators_rows(session, factory):
    period = factory.period()
    evaluator, intruder, faculty = factory.profile("evaluator"), factory.profile("evaluator"), factory.profile()
    a = factory.assignment(period, evaluator, faculty)

    assert assignments.get_owned_assignment(session, evaluator.id, a.id).id == a.id
    with pytest.raises(PermissionDenied):
        assignments.get_owned_assignment(session, intruder.id, a.id)
    with pytest.raises(PermissionDenied):
        assignments.get_owned_assignment(session, evaluator.id, "missing")


def test_create_assignment_validates_role_and_references(session, factory):
    period = factory.period()
    evaluator, faculty = factory.profile("evaluator"), factory.profile()

    with pytest.raises(InvalidRequest):
        assignments.create_assignment(session, period.id, faculty.id, evaluator.id, role="mentor")
    with pytest.raises(InvalidRequest):
        assignments.create_assignment(session, "missing", faculty.id, evaluator.id)
    with pytest.raises(InvalidRequest):
        assignments.create_assignment(session, period.id, "", evaluator.id)

    a = assignments.create_assignment(session, period.id, faculty.id, evaluator.id)
    assert a.role == "peer"
    assert a.section_id is None


def test_list_assignments_joins_related_rows(session, factory):
    period = factory.period()
    evaluator, faculty = factory.profile("evaluator"), factory.profile(name="Dr. Reyes")
    section = factory.section(faculty, code="MATH101", title="Calculus")
    factory.assignment(period, evaluator, faculty, section=section)

    [view] = assignments.list_assignments(session, evaluator_id=evaluator.id)
    assert view.period.id == period.id
    assert view.faculty.full_name == "Dr. Reyes"
    assert view.section.id == section.id
    assert view.course.code == "MATH101"
    assert view.evaluation is None
