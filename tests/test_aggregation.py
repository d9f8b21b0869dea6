from facultyeval.core import aggregation
from facultyeval.core.submission import submit
from facultyeval.models import Evaluation


def test_category_averages_round_and_skip_empty_categories(session, factory):
    period = factory.period()
    evaluator, faculty = factory.profile("evaluator"), factory.profile()
    a = factory.assignment(period, evaluator, faculty)
    rub = factory.rubric({"Teaching": [5, 5, 5], "Research": [5]})
    t1, t2, t3 = rub["Teaching"]
    [r1] = rub["Research"]

    result = submit(session, evaluator.id, a.id, {t1.id: 5, t2.id: 4, t3.id: 4, r1.id: 2})
    averages = aggregation.category_averages(session, result.evaluation_id)
    assert averages == {"Teaching": 4.33, "Research": 2.0}
    assert list(averages) == ["Teaching", "Research"]

    # a category added after submission has no responses and is left out
    factory.rubric({"Service": [5]})
    assert "Service" not in aggregation.category_averages(session, result.evaluation_id)


def test_category_averages_stay_within_item_range(session, factory):
    period = factory.period()
    evaluator, faculty = factory.profile("evaluator"), factory.profile()
    a = factory.assignment(period, evaluator, faculty)
    items = factory.rubric({"Teaching": [3, 3]})["Teaching"]

    result = submit(session, evaluator.id, a.id, {items[0].id: 1, items[1].id: 3})
    value = aggregation.category_averages(session, result.evaluation_id)["Teaching"]
    assert 1 <= value <= 3


def test_unknown_evaluation_has_no_averages(session):
    assert aggregation.category_averages(session, "missing") == {}
    assert aggregation.count_responses(session, "missing") == 0


def test_section_averages_rank_sections(session, factory):
    period = factory.period()
    fac_a, fac_b = factory.profile(name="Ana"), factory.profile(name="Ben")
    sec_a = factory.section(fac_a, code="BIO101", title="Biology")
    sec_b = factory.section(fac_b, code="CHEM101", title="Chemistry")
    factory.section(fac_b, code="PHYS101", title="Physics")  # never evaluated
    [item1, item2] = factory.rubric({"Teaching": [5, 5]})["Teaching"]

    s1, s2, s3 = (factory.profile("student") for _ in range(3))
    a1 = factory.assignment(period, s1, fac_a, role="student", section=sec_a)
    a2 = factory.assignment(period, s2, fac_a, role="student", section=sec_a)
    a3 = factory.assignment(period, s3, fac_b, role="student", section=sec_b)

    submit(session, s1.id, a1.id, {item1.id: 2, item2.id: 3})
    submit(session, s2.id, a2.id, {item1.id: 3, item2.id: 3})
    submit(session, s3.id, a3.id, {item1.id: 5, item2.id: 4})

    scores = aggregation.section_averages(session)
    assert [s.section_id for s in scores] == [sec_b.id, sec_a.id]
    top, second = scores
    assert (top.average, top.responses) == (4.5, 2)
    assert (second.average, second.responses) == (2.75, 4)
    assert top.course_label == "CHEM101 Chemistry"
    assert top.faculty_name == "Ben"


def test_section_averages_ignore_drafts_and_filter_by_period(session, factory):
    period, other = factory.period(), factory.period(name="Spring")
    fac = factory.profile()
    sec = factory.section(fac)
    [item] = factory.rubric({"Teaching": [5]})["Teaching"]
    st1, st2 = factory.profile("student"), factory.profile("student")
    a1 = factory.assignment(period, st1, fac, role="student", section=sec)
    a2 = factory.assignment(other, st2, fac, role="student", section=sec)

    submit(session, st1.id, a1.id, {item.id: 4})
    result = submit(session, st2.id, a2.id, {item.id: 2})
    assert aggregation.section_averages(session)[0].average == 3.0
    assert aggregation.section_averages(session, period_id=period.id)[0].average == 4.0

    draft = session.get(Evaluation, result.evaluation_id)
    draft.status = "draft"
    session.add(draft)
    session.commit()
    [only] = aggregation.section_averages(session)
    assert (only.average, only.responses) == (4.0, 1)
