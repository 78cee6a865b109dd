from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from portfolio.errors import FOREIGN_KEY_VIOLATION, UNIQUE_VIOLATION, classify_integrity_error, field_errors
from portfolio.models import Page, User
from portfolio import seed


def _integrity(orig):
    return IntegrityError("INSERT ...", {}, orig)


def test_classify_postgres_codes():
    assert classify_integrity_error(_integrity(SimpleNamespace(pgcode="23505"))) == UNIQUE_VIOLATION
    assert classify_integrity_error(_integrity(SimpleNamespace(pgcode="23503"))) == FOREIGN_KEY_VIOLATION


def test_classify_sqlite_messages():
    assert classify_integrity_error(_integrity(Exception("UNIQUE constraint failed: pages.slug"))) == UNIQUE_VIOLATION
    assert classify_integrity_error(_integrity(Exception("FOREIGN KEY constraint failed"))) == FOREIGN_KEY_VIOLATION
    assert classify_integrity_error(_integrity(Exception("NOT NULL constraint failed: pages.title"))) is None


def test_field_errors_uses_wire_names():
    errors = [
        {"loc": ("body", "jobTitle"), "msg": "Field required"},
        {"loc": ("body", "imageUrl"), "msg": "Value error, Invalid URL"},
        {"loc": ("query", "pageId"), "msg": "Input should be a valid integer"},
    ]
    assert field_errors(errors) == {
        "jobTitle": ["Field required"],
        "imageUrl": ["Invalid URL"],
        "pageId": ["Input should be a valid integer"],
    }


def test_invalid_json_body(client, admin_headers):
    r = client.post(
        "/api/pages",
        content="{not json",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid JSON body"}


def test_seed_is_idempotent(db, monkeypatch):
    monkeypatch.setattr(seed, "SessionLocal", lambda: db)
    seed.run()
    seed.run()

    assert db.query(User).filter_by(role="ADMIN").count() == 1
    home = db.query(Page).filter_by(slug="home").one()
    assert len(home.hero_components) == 1
    assert len(home.experience_components) == 2
    assert len(home.education_components) == 1
