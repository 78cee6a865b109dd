import os

# must be set before portfolio.config is imported
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["ENV"] = "test"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.pop("UPLOAD_REQUIRE_AUTH", None)

import pytest
from fastapi.testclient import TestClient

from portfolio.database import Base, SessionLocal, engine
from portfolio.main import app
from portfolio.models import Page, User
from portfolio.security import hash_password, token_for_user


@pytest.fixture(autouse=True)
def _reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _make_user(db, email, role, password="secret123"):
    user = User(email=email, name=email.split("@")[0], password_hash=hash_password(password), role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin@example.com", "ADMIN")


@pytest.fixture
def plain_user(db):
    return _make_user(db, "user@example.com", "USER")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {token_for_user(admin_user)}"}


@pytest.fixture
def user_headers(plain_user):
    return {"Authorization": f"Bearer {token_for_user(plain_user)}"}


@pytest.fixture
def page(db):
    p = Page(slug="home", title="Home", is_published=True, about_content="About me")
    db.add(p)
    db.commit()
    db.refresh(p)
    return p
