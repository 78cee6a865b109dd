import pytest


@pytest.fixture
def hero(client, admin_headers, page):
    r = client.post(
        "/api/hero",
        json={
            "pageId": page.id,
            "order": 0,
            "headline": "Old",
            "subheadline": "Sub",
            "ctaLabel": "Contact",
            "imageUrl": "/me.jpg",
        },
        headers=admin_headers,
    )
    assert r.status_code == 201
    return r.json()


# ---- hero ----
def test_patch_hero_changes_only_headline(client, admin_headers, hero):
    r = client.patch(f"/api/hero/{hero['id']}", json={"headline": "New"}, headers=admin_headers)
    assert r.status_code == 200
    body = r.json()
    assert body["headline"] == "New"
    for field in ("subheadline", "ctaLabel", "imageUrl", "order", "pageId"):
        assert body[field] == hero[field]


def test_hero_order_is_unique_per_page(client, admin_headers, page, hero):
    r = client.post("/api/hero", json={"pageId": page.id, "order": 0}, headers=admin_headers)
    assert r.status_code == 409


def test_hero_requires_existing_page(client, admin_headers):
    r = client.post("/api/hero", json={"pageId": 999, "order": 0}, headers=admin_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Page with ID 999 not found."}


def test_hero_rejects_bad_image_url(client, admin_headers, page):
    r = client.post(
        "/api/hero",
        json={"pageId": page.id, "order": 1, "imageUrl": "ftp://example.com/x.png"},
        headers=admin_headers,
    )
    assert r.status_code == 400
    assert r.json()["errors"]["imageUrl"] == ["Invalid URL"]


def test_hero_list_filters_by_page(client, hero, page):
    assert len(client.get(f"/api/hero?pageId={page.id}").json()) == 1
    assert client.get("/api/hero?pageId=999").json() == []


# ---- experience ----
def test_experience_create_then_conflict(client, admin_headers, page):
    payload = {"pageId": page.id, "order": 10, "jobTitle": "PM", "company": "Acme", "startDate": "2022-01-15"}
    r = client.post("/api/experience", json=payload, headers=admin_headers)
    assert r.status_code == 201
    assert isinstance(r.json()["id"], int)

    r = client.post("/api/experience", json=payload, headers=admin_headers)
    assert r.status_code == 409
    assert r.json() == {"error": "This experience entry already exists for this page."}


def test_experience_round_trip(client, admin_headers, page):
    payload = {
        "pageId": page.id,
        "order": 1,
        "jobTitle": "Engineer",
        "company": "Initech",
        "location": "Austin, TX",
        "startDate": "2019-03-01",
        "endDate": "2021-07-31",
        "description": "Reports.",
    }
    created = client.post("/api/experience", json=payload, headers=admin_headers).json()
    fetched = client.get(f"/api/experience/{created['id']}").json()
    for key, value in payload.items():
        assert fetched[key] == value


def test_experience_missing_fields(client, admin_headers, page):
    r = client.post("/api/experience", json={"pageId": page.id, "order": 0}, headers=admin_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["error"] == "Invalid input data"
    assert set(body["errors"]) >= {"jobTitle", "company", "startDate"}


def test_experience_recent_sort(client, admin_headers, page):
    rows = [
        ("Old", "2015-01-01", "2016-01-01", 0),
        ("Current", "2020-01-01", None, 2),
        ("Mid", "2017-01-01", "2019-01-01", 1),
    ]
    for title, start, end, order in rows:
        client.post(
            "/api/experience",
            json={"pageId": page.id, "order": order, "jobTitle": title, "company": "Co", "startDate": start, "endDate": end},
            headers=admin_headers,
        )

    by_order = client.get(f"/api/experience?pageId={page.id}").json()
    assert [e["jobTitle"] for e in by_order] == ["Old", "Mid", "Current"]

    recent = client.get(f"/api/experience?pageId={page.id}&sort=recent").json()
    assert [e["jobTitle"] for e in recent] == ["Current", "Mid", "Old"]


def test_experience_rename_into_existing_conflicts(client, admin_headers, page):
    base = {"pageId": page.id, "order": 0, "company": "Acme", "startDate": "2020-01-01"}
    client.post("/api/experience", json={**base, "jobTitle": "Dev"}, headers=admin_headers)
    other = client.post("/api/experience", json={**base, "jobTitle": "Lead"}, headers=admin_headers).json()

    r = client.patch(f"/api/experience/{other['id']}", json={"jobTitle": "Dev"}, headers=admin_headers)
    assert r.status_code == 409


def test_delete_twice(client, admin_headers, page):
    created = client.post(
        "/api/experience",
        json={"pageId": page.id, "order": 0, "jobTitle": "Dev", "company": "Acme", "startDate": "2020-01-01"},
        headers=admin_headers,
    ).json()
    r = client.delete(f"/api/experience/{created['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Experience deleted successfully"}
    assert client.delete(f"/api/experience/{created['id']}", headers=admin_headers).status_code == 404


def test_delete_nonexistent(client, admin_headers):
    assert client.delete("/api/hero/12345", headers=admin_headers).status_code == 404


# ---- education ----
def test_education_list_requires_page_id(client):
    r = client.get("/api/education")
    assert r.status_code == 400


def test_education_crud(client, admin_headers, page):
    payload = {
        "pageId": page.id,
        "order": 0,
        "institution": "State University",
        "degree": "BSc",
        "startDate": "2010-09-01",
        "endDate": "2014-06-30",
    }
    r = client.post("/api/education", json=payload, headers=admin_headers)
    assert r.status_code == 201
    edu_id = r.json()["id"]

    assert client.post("/api/education", json=payload, headers=admin_headers).status_code == 409

    put = {k: v for k, v in payload.items() if k != "pageId"}
    put["degree"] = "MSc"
    r = client.put(f"/api/education/{edu_id}", json=put, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["degree"] == "MSc"

    listed = client.get(f"/api/education?pageId={page.id}").json()
    assert [e["degree"] for e in listed] == ["MSc"]
