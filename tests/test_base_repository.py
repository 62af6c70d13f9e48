import pytest

from core.models import Project
from core.repositories import ProjectRepository, UserRepository


def test_unknown_filter_key_raises(test_session):
    repo = UserRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.exists_where(typo_key=5)


def test_exists_by_email(test_session, people):
    repo = UserRepository(test_session)

    assert repo.exists_by_email("carol@example.com")
    assert not repo.exists_by_email("nobody@example.com")


def test_get_by_email_returns_stored_user(test_session, alice):
    user = UserRepository(test_session).get_by_email("alice@example.com")

    assert user is not None
    assert user.id == alice.id


def test_save_assigns_id_and_delete_removes(test_session, alice):
    repo = ProjectRepository(test_session)
    project = repo.save(Project(name="Scratch", owner_id=alice.id))

    assert project.id is not None
    assert repo.exists_where(name="Scratch")

    repo.delete(project)

    assert repo.get_by_id(project.id) is None
