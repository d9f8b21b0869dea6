from datetime import datetime, timezone

import pytest

from facultyeval.core import rubric
from facultyeval.core.errors import InvalidRequest, NotFound
from facultyeval.models import RubricCategory, RubricItem


def test_categories_and_items_come_back_in_order(session, factory):
    factory.rubric({"Teaching": [5, 5], "Research": [3]})

    cats = rubric.list_categories(session)
    assert [c.category.label for c in cats] == ["Teaching", "Research"]
    assert [c.category.order_index for c in cats] == [0, 1]
    assert [i.prompt for i in cats[0].items] == ["Teaching item 1", "Teaching item 2"]
    assert [i.order_index for i in cats[0].items] == [1, 2]
    assert cats[1].items[0].max_score == 3


def test_equal_ordinals_fall_back_to_insertion_order(session):
    early = RubricCategory(label="B first", order_index=0, created_at=datetime(2026, 1, 1, tzinfo=timezone.utc))
    late = RubricCategory(label="A second", order_index=0, created_at=datetime(2026, 1, 2, tzinfo=timezone.utc))
    session.add_all([late, early])
    session.commit()

    assert [c.category.label for c in rubric.list_categories(session)] == ["B first", "A second"]


def test_total_item_count(session, factory):
    assert rubric.total_item_count(session) == 0
    factory.rubric({"Teaching": [5, 5], "Service": [5, 4, 3]})
    assert rubric.total_item_count(session) == 5


def test_item_defaults_to_max_score_five(session):
    cat = rubric.create_category(session, "Teaching")
    item = rubric.add_item(session, cat.id, "Explains clearly")
    assert item.max_score == 5


def test_deleting_a_category_removes_its_items(session, factory):
    items = factory.rubric({"Teaching": [5, 5], "Research": [5]})
    teaching_id = items["Teaching"][0].category_id

    rubric.delete_category(session, teaching_id)

    assert rubric.total_item_count(session) == 1
    assert session.get(RubricItem, items["Teaching"][0].id) is None


@pytest.mark.parametrize("label", ["", "   "])
def test_blank_category_label_is_rejected(session, label):
    with pytest.raises(InvalidRequest):
        rubric.create_category(session, label)


def test_duplicate_category_label_is_rejected(session):
    rubric.create_category(session, "Teaching")
    with pytest.raises(InvalidRequest):
        rubric.create_category(session, " Teaching ")
    assert len(rubric.list_categories(session)) == 1


@pytest.mark.parametrize("max_score", [0, -1, True])
def test_item_max_score_must_be_positive(session, max_score):
    cat = rubric.create_category(session, "Teaching")
    with pytest.raises(InvalidRequest):
        rubric.add_item(session, cat.id, "Prompt", max_score=max_score)


def test_item_for_unknown_category(session):
    with pytest.raises(NotFound):
        rubric.add_item(session, "missing", "Prompt")
