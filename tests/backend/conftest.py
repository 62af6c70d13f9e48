from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.auth.jwt import create_access_token
from backend.app.dependencies import get_publisher
from backend.app.main import create_app
from core.config import get_settings
from core.db import db, get_db
from core.notifications import InMemoryNotificationPublisher


@pytest.fixture
def test_app_client(
    test_db, monkeypatch
) -> Iterator[tuple[TestClient, sessionmaker, InMemoryNotificationPublisher]]:
    db_url, TestingSessionLocal, engine = test_db

    # Startup initializes the global manager; point it at the test database
    monkeypatch.setenv("DATABASE_URL", db_url)
    monkeypatch.setenv("JWT_SECRET_KEY", "test-signing-key-that-is-long-enough-0123456789")
    get_settings.cache_clear()
    db.reset()

    app = create_app()
    publisher = InMemoryNotificationPublisher()

    def override_get_db() -> Iterator[Session]:
        session = TestingSessionLocal()
        try:
            yield session
            session.commit()  # Auto-commit on success like production
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_publisher] = lambda: publisher

    with TestClient(app) as client:
        yield client, TestingSessionLocal, publisher

    db.reset()
    get_settings.cache_clear()


def auth_headers(email: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}


@pytest.fixture
def headers_for(test_app_client):
    """Bearer headers for any email, signed with the test key."""
    return auth_headers


@pytest.fixture
def authorized_client(test_app_client, people, project_id):
    """Client plus bearer headers for alice (project owner) and bob."""
    client, TestingSessionLocal, publisher = test_app_client
    headers = {
        "alice": auth_headers(people["alice"].email),
        "bob": auth_headers(people["bob"].email),
    }
    yield client, headers, publisher
