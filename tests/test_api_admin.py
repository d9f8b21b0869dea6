import pytest

from facultyeval.core.settings import settings
from facultyeval.core.tokens import parse_token

API = settings.API_PREFIX


@pytest.fixture()
def admin(factory):
    return factory.profile("admin")


def test_admin_routes_require_admin_role(client, auth, factory):
    r = client.get(f"{API}/admin/periods")
    assert r.status_code == 401

    r = client.get(f"{API}/admin/periods", headers=auth(factory.profile("faculty")))
    assert r.status_code == 403
    assert r.json()["error"] == "permission_denied"


def test_period_lifecycle(client, auth, admin):
    h = auth(admin)
    r = client.post(f"{API}/admin/periods", json={"name": "Fall 2026", "start_date": "2026-09-01"}, headers=h)
    assert r.status_code == 200
    period = r.json()["period"]
    assert period["status"] == "draft"

    r = client.patch(f"{API}/admin/periods/{period['id']}", json={"status": "open"}, headers=h)
    assert r.json()["period"]["status"] == "open"
    r = client.patch(f"{API}/admin/periods/{period['id']}", json={"status": "archived"}, headers=h)
    assert r.status_code == 400

    r = client.get(f"{API}/admin/periods", headers=h)
    assert [p["id"] for p in r.json()["items"]] == [period["id"]]

    r = client.delete(f"{API}/admin/periods/{period['id']}", headers=h)
    assert r.status_code == 200
    r = client.delete(f"{API}/admin/periods/{period['id']}", headers=h)
    assert r.status_code == 404


def test_rubric_administration(client, auth, admin):
    h = auth(admin)
    cat = client.post(f"{API}/admin/rubric/categories", json={"label": "Teaching"}, headers=h).json()["category"]
    assert cat["order_index"] == 0

    item = client.post(
        f"{API}/admin/rubric/categories/{cat['id']}/items", json={"prompt": "Explains clearly"}, headers=h
    ).json()["item"]
    assert item["max_score"] == 5
    assert item["order_index"] == 1

    r = client.post(f"{API}/admin/rubric/categories/{cat['id']}/items", json={"prompt": " "}, headers=h)
    assert r.status_code == 400

    r = client.get(f"{API}/admin/metrics", headers=h)
    assert r.json()["rubricItems"] == 1

    assert client.delete(f"{API}/admin/rubric/items/{item['id']}", headers=h).status_code == 200
    assert client.delete(f"{API}/admin/rubric/categories/{cat['id']}", headers=h).status_code == 200
    assert client.get(f"{API}/admin/rubric", headers=h).json()["categories"] == []


def test_user_course_section_and_assignment_records(client, auth, admin):
    h = auth(admin)
    r = client.post(f"{API}/admin/users", json={"email": "reyes@example.edu", "full_name": "Dr. Reyes"}, headers=h)
    assert r.status_code == 200
    faculty_id = r.json()["userId"]
    assert str(parse_token(r.json()["token"])) == faculty_id

    r = client.post(f"{API}/admin/users", json={"email": "reyes@example.edu", "full_name": "Again"}, headers=h)
    assert r.status_code == 400
    r = client.post(f"{API}/admin/users", json={"email": "x@example.edu", "full_name": "X", "role": "dean"}, headers=h)
    assert r.status_code == 400

    evaluator_id = client.post(
        f"{API}/admin/users",
        json={"email": "peer@example.edu", "full_name": "Peer", "role": "evaluator"},
        headers=h,
    ).json()["userId"]

    course = client.post(f"{API}/admin/courses", json={"code": "CS101", "title": "Programming"}, headers=h).json()["course"]
    section = client.post(
        f"{API}/admin/sections",
        json={"course_id": course["id"], "faculty_id": faculty_id, "term": "Fall"},
        headers=h,
    ).json()["section"]
    r = client.post(f"{API}/admin/sections", json={"course_id": course["id"], "faculty_id": ""}, headers=h)
    assert r.status_code == 400

    period = client.post(f"{API}/admin/periods", json={"name": "Fall", "status": "open"}, headers=h).json()["period"]
    r = client.post(
        f"{API}/admin/assignments",
        json={
            "period_id": period["id"],
            "faculty_id": faculty_id,
            "evaluator_id": evaluator_id,
            "section_id": section["id"],
        },
        headers=h,
    )
    assert r.status_code == 200
    assignment = r.json()["assignment"]
    assert assignment["role"] == "peer"

    [row] = client.get(f"{API}/admin/assignments", headers=h).json()["items"]
    assert row["section"]["course"]["code"] == "CS101"
    assert row["evaluator"]["id"] == evaluator_id

    [sec] = client.get(f"{API}/admin/sections", headers=h).json()["items"]
    assert sec["faculty"]["full_name"] == "Dr. Reyes"

    r = client.delete(f"{API}/admin/assignments/{assignment['id']}", headers=h)
    assert r.status_code == 200
    assert client.get(f"{API}/admin/assignments", headers=h).json()["items"] == []


def test_section_scores_report(client, auth, admin, factory):
    period = factory.period()
    faculty = factory.profile(name="Ana")
    section = factory.section(faculty, code="BIO101", title="Biology")
    student = factory.profile("student")
    factory.assignment(period, student, faculty, role="student", section=section)
    [item] = factory.rubric({"Teaching": [5]})["Teaching"]

    r = client.post(
        f"{API}/evaluations/student",
        json={"periodId": period.id, "sectionId": section.id, "responses": {item.id: 4}},
        headers=auth(student),
    )
    assert r.status_code == 200

    r = client.get(f"{API}/admin/section-scores", headers=auth(admin))
    assert r.status_code == 200
    [row] = r.json()["items"]
    assert row == {
        "sectionId": section.id,
        "courseLabel": "BIO101 Biology",
        "facultyName": "Ana",
        "term": "Fall",
        "schedule": "MWF 9:00",
        "average": 4.0,
        "responses": 1,
    }
