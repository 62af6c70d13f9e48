"""
Pytest fixtures for issue tracker tests.

Each test gets its own SQLite file so the audit recorder's independent
sessions see exactly what the primary session committed.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.db import Base, enable_sqlite_foreign_keys
from core.identity import Principal
from core.models import Project, User
from core.notifications import InMemoryNotificationPublisher
from core.services import (
    AuditRecorder,
    CommentService,
    IssueQueryEngine,
    IssueService,
    ProjectService,
)


@pytest.fixture(scope="function")
def test_db(tmp_path):
    """Create a fresh test database for each test using ORM."""
    db_url = f"sqlite:///{tmp_path / 'tracker_test.db'}"
    engine = create_engine(db_url, connect_args={"check_same_thread": False})
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    engine.dispose()


@pytest.fixture
def session_factory(test_db):
    _, TestingSessionLocal, _ = test_db
    return TestingSessionLocal


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def _create_user(session, name: str, email: str) -> Principal:
    """Helper to store a user and return the principal for it."""
    user = User(name=name, email=email, password_hash="x")
    session.add(user)
    session.flush()
    return Principal(id=user.id, email=user.email, name=user.name)


@pytest.fixture
def people(test_session):
    """Three stored users keyed by first name."""
    principals = {
        "alice": _create_user(test_session, "Alice", "alice@example.com"),
        "bob": _create_user(test_session, "Bob", "bob@example.com"),
        "carol": _create_user(test_session, "Carol", "carol@example.com"),
    }
    test_session.commit()
    return principals


@pytest.fixture
def alice(people) -> Principal:
    return people["alice"]


@pytest.fixture
def bob(people) -> Principal:
    return people["bob"]


@pytest.fixture
def project_id(test_session, alice) -> int:
    """A project owned by alice."""
    project = Project(name="Tracker", owner_id=alice.id)
    test_session.add(project)
    test_session.commit()
    return project.id


@pytest.fixture
def publisher() -> InMemoryNotificationPublisher:
    return InMemoryNotificationPublisher()


@pytest.fixture
def audit(session_factory, publisher) -> AuditRecorder:
    return AuditRecorder(session_factory, publisher)


@pytest.fixture
def issue_service(test_session, audit, publisher) -> IssueService:
    return IssueService(test_session, audit, publisher)


@pytest.fixture
def comment_service(test_session, audit, publisher) -> CommentService:
    return CommentService(test_session, audit, publisher)


@pytest.fixture
def query_engine(test_session) -> IssueQueryEngine:
    return IssueQueryEngine(test_session)


@pytest.fixture
def project_service(test_session) -> ProjectService:
    return ProjectService(test_session)
