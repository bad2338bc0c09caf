"""
Shared fixtures: in-memory SQLite database, seeded users and catalog items,
and a TestClient whose requests use the same database session factory.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.config import settings
from app.core.security import create_access_token
from app.crud import crud_giveaway, crud_product, crud_user
from app.init_db import init_db
from app.main import app as fastapi_app
from app.services import message_composer


@pytest.fixture
def engine():
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, username, **extra):
    data = {
        "username": username,
        "email": f"{username}@example.com",
        "first_name": username.capitalize(),
        "last_name": "Tester",
    }
    data.update(extra)
    return crud_user.create(db, obj_in=data)


@pytest.fixture
def alice(db):
    return _make_user(db, "alice")


@pytest.fixture
def bob(db):
    return _make_user(db, "bob")


@pytest.fixture
def carol(db):
    return _make_user(db, "carol")


@pytest.fixture
def listing(db, bob):
    return crud_product.create(db, obj_in={
        "seller_id": bob.id,
        "title": "Desk Lamp",
        "price": 15.5,
        "images": ["https://img.example.com/lamp.jpg"],
    })


@pytest.fixture
def giveaway(db, bob, listing):
    # Created after the listing so its id is not also a listing id
    crud_giveaway.create(db, obj_in={"owner_id": bob.id, "title": "Placeholder"})
    return crud_giveaway.create(db, obj_in={
        "owner_id": bob.id,
        "title": "Free Textbooks",
        "images": [{"image_url": "https://img.example.com/books.jpg"}],
    })


@pytest.fixture
def send(db):
    """Send a message through the composer: send(sender, recipient, content, **kwargs)."""
    def _send(sender, recipient, content="hello", **kwargs):
        return message_composer.send(
            db,
            sender_id=sender.id,
            recipient_id=recipient.id,
            content=content,
            **kwargs,
        )
    return _send


@pytest.fixture
def read_mark_scope():
    """Temporarily switch READ_MARK_SCOPE."""
    original = settings.READ_MARK_SCOPE

    def _set(scope):
        settings.READ_MARK_SCOPE = scope

    yield _set
    settings.READ_MARK_SCOPE = original


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    fastapi_app.dependency_overrides[get_db] = override_get_db
    with TestClient(fastapi_app) as test_client:
        yield test_client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user):
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def api_prefix():
    return settings.API_V1_PREFIX
