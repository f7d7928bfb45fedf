import os

# Settings are read once at import time; point them away from any developer .env first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["CHAT_API_KEY"] = ""
os.environ["USE_IN_MEMORY_STORAGE"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.dependencies import get_reply_sender, get_storage_client
from app.main import app
from app.services.auth import seed_admin
from app.services.storage import InMemoryStorageClient

ADMIN_EMAIL = "admin@fountainofpeace.com"
ADMIN_PASSWORD = "admin123"


class RecordingSender:
    """Stand-in for the mail provider; records every reply and returns ``ok``."""

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.sent: list[tuple[str, str, str]] = []

    def __call__(self, to_email: str, name: str, body: str) -> bool:
        self.sent.append((to_email, name, body))
        return self.ok


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage():
    return InMemoryStorageClient()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def client(session_factory, storage, sender):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_client] = lambda: storage
    app.dependency_overrides[get_reply_sender] = lambda: sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    return seed_admin(db, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def auth_headers(client, admin):
    r = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}
