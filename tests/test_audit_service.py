"""Tests for the audit recorder's independent unit of work."""

from datetime import datetime, timedelta

import pytest

from core.constants import activities_topic
from core.errors import NotFoundError, UnauthorizedError
from core.identity import Principal
from core.models import ActivityLog, ActivityType, Issue


@pytest.fixture
def issue_id(test_session, alice, project_id):
    issue = Issue(title="Audited", project_id=project_id, creator_id=alice.id)
    test_session.add(issue)
    test_session.commit()
    return issue.id


def test_record_persists_and_publishes(audit, publisher, alice, issue_id):
    view = audit.record(issue_id, ActivityType.STATUS_CHANGED, "OPEN", "CLOSED", alice)

    assert view.id is not None
    assert view.user_id == alice.id
    assert view.user_name == "Alice"
    assert view.old_value == "OPEN"
    assert view.new_value == "CLOSED"

    events = publisher.events_for(activities_topic(issue_id))
    assert len(events) == 1
    assert events[0].activity_log_id == view.id
    assert events[0].activity_type == "STATUS_CHANGED"


def test_record_requires_existing_issue(audit, alice):
    with pytest.raises(NotFoundError):
        audit.record(12345, ActivityType.COMMENT_ADDED, None, None, alice)


def test_record_requires_resolvable_user(audit, issue_id):
    stranger = Principal(id=999, email="ghost@example.com", name="Ghost")

    with pytest.raises(UnauthorizedError):
        audit.record(issue_id, ActivityType.COMMENT_ADDED, None, None, stranger)

    with pytest.raises(UnauthorizedError):
        audit.record(issue_id, ActivityType.COMMENT_ADDED, None, None, None)


def test_try_record_swallows_failures(audit, publisher):
    result = audit.try_record(12345, ActivityType.COMMENT_ADDED, None, None, None)

    assert result is None
    assert publisher.published == []


def test_failed_publish_does_not_fail_record(session_factory, alice, issue_id):
    from core.notifications import NotificationPublisher
    from core.services import AuditRecorder

    class BrokenPublisher(NotificationPublisher):
        def _send(self, topic, event):
            raise ConnectionError("broker down")

    view = AuditRecorder(session_factory, BrokenPublisher()).record(
        issue_id, ActivityType.COMMENT_ADDED, None, None, alice
    )

    assert view.id is not None


def test_list_by_issue_newest_first_with_id_tie_break(test_session, audit, alice, issue_id):
    base = datetime(2024, 1, 1, 12, 0, 0)
    rows = [
        (ActivityType.ISSUE_CREATED, base),
        (ActivityType.TITLE_CHANGED, base + timedelta(minutes=5)),
        (ActivityType.STATUS_CHANGED, base + timedelta(minutes=5)),
        (ActivityType.COMMENT_ADDED, base + timedelta(minutes=10)),
    ]
    ids = []
    for activity_type, created_at in rows:
        log = ActivityLog(
            issue_id=issue_id,
            activity_type=activity_type,
            user_id=alice.id,
            created_at=created_at,
        )
        test_session.add(log)
        test_session.flush()
        ids.append(log.id)
    test_session.commit()

    listed = audit.list_by_issue(issue_id)

    assert [entry.id for entry in listed] == [ids[3], ids[1], ids[2], ids[0]]


def test_list_by_unknown_issue_is_empty(audit):
    assert audit.list_by_issue(424242) == []
