from portfolio.database import SessionLocal
from portfolio.routes import builder
from portfolio.schemas.builder import BuilderDocument
from portfolio.services.canvas import Canvas, CanvasRect


def _document(page_id, **extra):
    body = {
        "pageId": page_id,
        "elements": [
            {
                "id": "element-1",
                "type": "section",
                "styles": {"width": "100%"},
                "children": [
                    {
                        "id": "element-2",
                        "type": "heading",
                        "parent": "element-1",
                        "props": {"content": "Hello", "level": 1},
                    }
                ],
            }
        ],
        "theme": {"colors": {"primary": "#000000"}},
    }
    body.update(extra)
    return body


def test_load_missing_document(client, page):
    r = client.get(f"/api/builder/save?pageId={page.id}")
    assert r.status_code == 404
    assert r.json() == {"error": "No builder data found for this page"}


def test_load_requires_page_id(client):
    assert client.get("/api/builder/save").status_code == 400


def test_save_then_load(client, admin_headers, page):
    r = client.post("/api/builder/save", json=_document(page.id), headers=admin_headers)
    assert r.status_code == 200
    saved = r.json()
    assert saved["success"] is True
    assert saved["data"]["version"] == 1

    r = client.get(f"/api/builder/save?pageId={page.id}")
    data = r.json()["data"]
    heading = data["elements"][0]["children"][0]
    assert heading["type"] == "heading"
    assert heading["props"]["content"] == "Hello"
    assert data["theme"]["colors"]["primary"] == "#000000"
    # unspecified theme sections fall back to defaults
    assert data["theme"]["typography"]["headingFont"] == "Inter"


def test_save_overwrites_and_bumps_version(client, admin_headers, page):
    client.post("/api/builder/save", json=_document(page.id), headers=admin_headers)
    r = client.post("/api/builder/save", json=_document(page.id, elements=[]), headers=admin_headers)
    assert r.json()["data"]["version"] == 2
    assert r.json()["data"]["elements"] == []


def test_stale_expected_version_conflicts(client, admin_headers, page):
    client.post("/api/builder/save", json=_document(page.id, expectedVersion=0), headers=admin_headers)
    client.post("/api/builder/save", json=_document(page.id, expectedVersion=1), headers=admin_headers)

    r = client.post("/api/builder/save", json=_document(page.id, expectedVersion=1), headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["currentVersion"] == 2


def test_unknown_element_type_rejected(client, admin_headers, page):
    doc = _document(page.id, elements=[{"id": "x", "type": "marquee"}])
    r = client.post("/api/builder/save", json=doc, headers=admin_headers)
    assert r.status_code == 400


def test_save_requires_admin(client, user_headers, page):
    assert client.post("/api/builder/save", json=_document(page.id), headers=user_headers).status_code == 403


def test_save_unknown_page(client, admin_headers):
    assert client.post("/api/builder/save", json=_document(999), headers=admin_headers).status_code == 404


def test_canvas_document_round_trips_through_api(client, admin_headers, page):
    canvas = Canvas(clock=lambda: 1700000000.0)
    section = canvas.drop_new("section", 110, 220, CanvasRect(left=10, top=20, width=800, height=600))
    canvas.drop_new("button", 150, 260, CanvasRect(left=10, top=20, width=800, height=600), parent_id=section.id)

    payload = canvas.to_document(page.id).model_dump(mode="json", by_alias=True, exclude_none=True)
    assert client.post("/api/builder/save", json=payload, headers=admin_headers).status_code == 200

    data = client.get(f"/api/builder/save?pageId={page.id}").json()["data"]
    restored = Canvas.from_document(BuilderDocument.model_validate(data))
    assert restored.find(section.id).styles["left"] == "100px"
    assert restored.find(section.id).children[0].type == "button"


def test_save_racing_another_editor_is_rejected(client, admin_headers, page, monkeypatch):
    client.post("/api/builder/save", json=_document(page.id), headers=admin_headers)
    real_update = builder.update_document

    def other_editor_commits_first(db, page_id, elements, theme, expected_version=None):
        # lands between this request's version check and its UPDATE
        other = SessionLocal()
        try:
            assert real_update(other, page_id, [], {"colors": {"primary": "#ff0000"}}, 1)
            other.commit()
        finally:
            other.close()
        return real_update(db, page_id, elements, theme, expected_version)

    monkeypatch.setattr(builder, "update_document", other_editor_commits_first)
    r = client.post("/api/builder/save", json=_document(page.id, expectedVersion=1), headers=admin_headers)
    assert r.status_code == 409
    assert r.json()["currentVersion"] == 2

    data = client.get(f"/api/builder/save?pageId={page.id}").json()["data"]
    assert data["version"] == 2
    assert data["elements"] == []
    assert data["theme"]["colors"]["primary"] == "#ff0000"


def test_update_document_guards_on_version(db, client, admin_headers, page):
    client.post("/api/builder/save", json=_document(page.id), headers=admin_headers)

    assert builder.update_document(db, page.id, [], {}, expected_version=1)
    db.commit()
    assert not builder.update_document(db, page.id, [], {}, expected_version=1)
    db.rollback()
    # no expected version: unconditional bump
    assert builder.update_document(db, page.id, [], {})
    db.commit()

    r = client.get(f"/api/builder/save?pageId={page.id}")
    assert r.json()["data"]["version"] == 3
