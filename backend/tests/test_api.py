"""Tests for the /api/v1 subpage endpoints."""

from __future__ import annotations

import pytest

from subpage.application.subpage.add_section import add_section
from subpage.application.subpage.section_state import set_section_stealth


@pytest.fixture
def page(build):
    course = build.course()
    return build.subpage(course, name="Week 1", intro="Start here")


def test_health(client) -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_requires_token(client, page) -> None:
    response = client.get(f"/api/v1/subpages/{page.cm.id}")

    assert response.status_code == 401


def test_requires_editing_role(client, page, auth_headers) -> None:
    response = client.get(f"/api/v1/subpages/{page.cm.id}", headers=auth_headers(role="student"))

    assert response.status_code == 403


def test_course_claim_limits_access(client, page, auth_headers) -> None:
    headers = auth_headers(courses=["another-course"])

    response = client.get(f"/api/v1/subpages/{page.cm.id}", headers=headers)

    assert response.status_code == 403


def test_get_unknown_subpage(client, app, auth_headers) -> None:
    response = client.get("/api/v1/subpages/missing", headers=auth_headers())

    assert response.status_code == 404
    assert response.get_json()["error"] == "NotFoundError"


def test_add_then_get(client, page, auth_headers) -> None:
    headers = auth_headers()

    response = client.post(
        f"/api/v1/subpages/{page.cm.id}/sections",
        json={"name": "Reading", "summary": "<p>Chapter 1</p>"},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.get_json()
    assert body["section"] == 100
    assert body["pageorder"] == 1

    response = client.get(f"/api/v1/subpages/{page.cm.id}", headers=headers)
    data = response.get_json()
    assert data["name"] == "Week 1"
    assert data["intro"] == "Start here"
    assert [(s["name"], s["pageorder"], s["stealth"]) for s in data["sections"]] == [
        ("Reading", 1, False)
    ]


def test_move_endpoint(client, page, auth_headers) -> None:
    ids = [add_section(subpage_id=page.id).section_id for _ in range(3)]

    response = client.patch(
        f"/api/v1/subpages/{page.cm.id}/sections/{ids[2]}/move",
        json={"pageorder": 1},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert [s["id"] for s in response.get_json()["sections"]] == [ids[2], ids[0], ids[1]]


def test_move_endpoint_validation(client, page, auth_headers) -> None:
    section_id = add_section(subpage_id=page.id).section_id
    url = f"/api/v1/subpages/{page.cm.id}/sections/{section_id}/move"

    missing = client.patch(url, json={}, headers=auth_headers())
    out_of_range = client.patch(url, json={"pageorder": 5}, headers=auth_headers())

    assert missing.status_code == 400
    assert out_of_range.status_code == 400
    assert out_of_range.get_json()["error"] == "InvariantViolation"


def test_stealth_endpoint(client, page, auth_headers) -> None:
    section_id = add_section(subpage_id=page.id).section_id
    url = f"/api/v1/subpages/{page.cm.id}/sections/{section_id}/stealth"

    assert client.put(url, json={"stealth": "yes"}, headers=auth_headers()).status_code == 400

    response = client.put(url, json={"stealth": True}, headers=auth_headers())
    assert response.status_code == 200

    data = client.get(f"/api/v1/subpages/{page.cm.id}", headers=auth_headers()).get_json()
    assert data["sections"][0]["stealth"] is True


def test_stealth_on_foreign_section(client, page, build, auth_headers) -> None:
    other = build.subpage(page.course, name="Other")
    section_id = add_section(subpage_id=other.id).section_id

    response = client.put(
        f"/api/v1/subpages/{page.cm.id}/sections/{section_id}/stealth",
        json={"stealth": True},
        headers=auth_headers(),
    )

    assert response.status_code == 404


def test_delete_endpoint_reports_warnings(client, page, build, registry, auth_headers) -> None:
    first = add_section(subpage_id=page.id).section_id
    second = add_section(subpage_id=page.id).section_id
    quiz_id = build.module(page.course, first, modname="quiz", name="Quiz").id

    response = client.delete(
        f"/api/v1/subpages/{page.cm.id}/sections/{first}",
        headers=auth_headers(),
    )

    assert response.status_code == 200
    warnings = response.get_json()["warnings"]
    assert [(w["cmid"], w["step"]) for w in warnings] == [(quiz_id, "instance")]

    data = client.get(f"/api/v1/subpages/{page.cm.id}", headers=auth_headers()).get_json()
    assert [(s["id"], s["pageorder"]) for s in data["sections"]] == [(second, 1)]


def test_empty_endpoint(client, page, build, auth_headers) -> None:
    section_id = add_section(subpage_id=page.id).section_id
    url = f"/api/v1/subpages/{page.cm.id}/sections/{section_id}/empty"

    assert client.get(url, headers=auth_headers()).get_json()["empty"] is True

    build.module(page.course, section_id)
    assert client.get(url, headers=auth_headers()).get_json()["empty"] is False


def test_course_subpages_endpoint(client, page, build, auth_headers) -> None:
    build.subpage(page.course, name="Week 2")

    response = client.get(f"/api/v1/courses/{page.course.id}/subpages", headers=auth_headers())

    assert response.status_code == 200
    assert sorted(s["name"] for s in response.get_json()["data"]) == ["Week 1", "Week 2"]


def test_destinations_and_moveable_endpoints(client, page, build, auth_headers) -> None:
    section_id = add_section(subpage_id=page.id).section_id
    build.module(page.course, section_id, name="Glossary")
    cmid = page.cm.id

    destinations = client.get(f"/api/v1/subpages/{cmid}/destinations?move=from", headers=auth_headers())
    assert destinations.status_code == 200
    options = destinations.get_json()["options"]
    assert options["Another section"][f"{cmid},new"] == "New section"
    assert "Course main page" in options

    moveable = client.get(f"/api/v1/subpages/{cmid}/moveable?move=from", headers=auth_headers())
    assert moveable.status_code == 200
    sections = moveable.get_json()["sections"]
    assert list(sections) == ["100"]
    assert list(sections["100"]["mods"].values()) == ["Glossary"]

    bad = client.get(f"/api/v1/subpages/{cmid}/moveable?move=up", headers=auth_headers())
    assert bad.status_code == 400


def test_capacity_error_maps_to_conflict(client, page, auth_headers, monkeypatch) -> None:
    from subpage.application.subpage import add_section as add_section_module
    from subpage.domain.exceptions import CapacityExceededError

    def exhausted(**kwargs):
        raise CapacityExceededError("no free section numbers")

    monkeypatch.setattr(add_section_module, "allocate_section_number", exhausted)

    response = client.post(f"/api/v1/subpages/{page.cm.id}/sections", json={}, headers=auth_headers())

    assert response.status_code == 409
    assert response.get_json()["error"] == "CapacityExceededError"


def test_audit_endpoint(client, page, auth_headers) -> None:
    for _ in range(3):
        add_section(subpage_id=page.id, actor_id="teacher-1")
    set_section_stealth(section_id=add_section(subpage_id=page.id).section_id, stealth=True)
    url = f"/api/v1/courses/{page.course.id}/audit"

    assert client.get(url, headers=auth_headers()).status_code == 403

    response = client.get(f"{url}?limit=2&action=subpage.section.add", headers=auth_headers(role="manager"))
    body = response.get_json()
    assert response.status_code == 200
    assert len(body["data"]) == 2
    assert body["meta"]["has_more"] is True

    bad = client.get(f"{url}?cursor=nonsense", headers=auth_headers(role="manager"))
    assert bad.status_code == 400


def test_audit_entries_page_through_and_filter_by_subpage(client, page, auth_headers) -> None:
    for _ in range(4):
        add_section(subpage_id=page.id, actor_id="teacher-1")
    url = f"/api/v1/courses/{page.course.id}/audit"
    headers = auth_headers(role="manager")

    first = client.get(url, query_string={"limit": 3, "subpage_id": page.id}, headers=headers).get_json()
    assert len(first["data"]) == 3
    assert first["meta"]["has_more"] is True

    entry = first["data"][0]
    assert entry["subpage_id"] == page.id
    assert entry["action"] == "subpage.section.add"
    assert entry["entity"]["type"] == "course_section"

    cursor = first["meta"]["next_cursor"]
    second = client.get(
        url, query_string={"limit": 3, "subpage_id": page.id, "cursor": cursor}, headers=headers
    ).get_json()
    assert len(second["data"]) == 1
    assert second["meta"] == {"next_cursor": None, "has_more": False}

    seen = {e["id"] for e in first["data"]} | {e["id"] for e in second["data"]}
    assert len(seen) == 4

    other = client.get(f"{url}?subpage_id=elsewhere", headers=headers).get_json()
    assert other["data"] == []
