"""Tests for issue create, update, read and delete."""

import pytest

from core.constants import ISSUES_TOPIC
from core.errors import InvalidInputError, NotFoundError, UnauthorizedError
from core.identity import Principal
from core.models import ActivityLog, ActivityType, Comment, IssuePriority, IssueStatus
from core.notifications import EventType
from core.schemas import IssueRequest


def _types(audit, issue_id):
    return [entry.activity_type for entry in audit.list_by_issue(issue_id)]


class TestCreateIssue:
    def test_defaults_and_hydrated_names(self, issue_service, alice, bob, project_id):
        view = issue_service.create_issue(
            IssueRequest(title="Crash on save", project_id=project_id, assignee_id=bob.id),
            alice,
        )

        assert view.status == IssueStatus.OPEN
        assert view.priority == IssuePriority.MEDIUM
        assert view.creator_id == alice.id
        assert view.creator_name == "Alice"
        assert view.assignee_name == "Bob"
        assert view.project_name == "Tracker"
        assert view.created_at is not None

    def test_records_one_created_entry_and_publishes(
        self, issue_service, audit, publisher, alice, project_id
    ):
        view = issue_service.create_issue(IssueRequest(title="Bug A", project_id=project_id), alice)

        entries = audit.list_by_issue(view.id)
        assert len(entries) == 1
        assert entries[0].activity_type == ActivityType.ISSUE_CREATED
        assert entries[0].old_value is None
        assert entries[0].new_value is None

        events = publisher.events_for(ISSUES_TOPIC)
        assert len(events) == 1
        assert events[0].event_type == EventType.CREATED
        assert events[0].issue_id == view.id
        assert events[0].status == "OPEN"

    def test_unknown_project(self, issue_service, alice):
        with pytest.raises(NotFoundError, match="Project not found"):
            issue_service.create_issue(IssueRequest(title="x", project_id=999), alice)

    def test_unknown_assignee(self, issue_service, alice, project_id):
        with pytest.raises(NotFoundError, match="Assignee not found"):
            issue_service.create_issue(
                IssueRequest(title="x", project_id=project_id, assignee_id=999), alice
            )

    def test_unresolvable_acting_user(self, issue_service, project_id):
        ghost = Principal(id=77, email="ghost@example.com", name="Ghost")

        with pytest.raises(UnauthorizedError):
            issue_service.create_issue(IssueRequest(title="x", project_id=project_id), ghost)
        with pytest.raises(UnauthorizedError):
            issue_service.create_issue(IssueRequest(title="x", project_id=project_id), None)

    def test_blank_title_rejected_in_service(self, issue_service, alice, project_id):
        request = IssueRequest.model_construct(
            title="   ",
            description=None,
            status=IssueStatus.OPEN,
            priority=IssuePriority.MEDIUM,
            project_id=project_id,
            assignee_id=None,
        )

        with pytest.raises(InvalidInputError):
            issue_service.create_issue(request, alice)

    def test_audit_failure_does_not_roll_back_creation(
        self, issue_service, audit, alice, project_id, monkeypatch
    ):
        def broken_record(*args, **kwargs):
            raise RuntimeError("audit store unavailable")

        monkeypatch.setattr(audit, "record", broken_record)

        view = issue_service.create_issue(IssueRequest(title="Survives", project_id=project_id), alice)

        assert issue_service.get_issue(view.id).title == "Survives"


class TestUpdateIssue:
    def test_bug_a_scenario(self, issue_service, audit, alice, project_id):
        created = issue_service.create_issue(
            IssueRequest(title="Bug A", project_id=project_id), alice
        )
        assert _types(audit, created.id) == [ActivityType.ISSUE_CREATED]

        issue_service.update_issue(
            created.id,
            IssueRequest(
                title="Bug A",
                project_id=project_id,
                status=IssueStatus.RESOLVED,
                priority=IssuePriority.HIGH,
            ),
            alice,
        )

        entries = audit.list_by_issue(created.id)
        assert len(entries) == 3
        changes = {
            e.activity_type: (e.old_value, e.new_value)
            for e in entries
            if e.activity_type != ActivityType.ISSUE_CREATED
        }
        assert changes == {
            ActivityType.STATUS_CHANGED: ("OPEN", "RESOLVED"),
            ActivityType.PRIORITY_CHANGED: ("MEDIUM", "HIGH"),
        }

    def test_no_op_update_records_nothing_but_refreshes(
        self, issue_service, audit, publisher, alice, project_id
    ):
        created = issue_service.create_issue(
            IssueRequest(title="Steady", description="", project_id=project_id), alice
        )

        updated = issue_service.update_issue(
            created.id,
            IssueRequest(title="Steady", description=None, project_id=project_id),
            alice,
        )

        assert _types(audit, created.id) == [ActivityType.ISSUE_CREATED]
        assert updated.updated_at >= created.updated_at
        assert [e.event_type for e in publisher.events_for(ISSUES_TOPIC)] == [
            EventType.CREATED,
            EventType.UPDATED,
        ]

    def test_activity_count_equals_changed_fields(self, issue_service, audit, alice, bob, project_id):
        created = issue_service.create_issue(
            IssueRequest(title="Old", description="d", project_id=project_id), alice
        )

        issue_service.update_issue(
            created.id,
            IssueRequest(
                title="New",
                description="d2",
                status=IssueStatus.CLOSED,
                priority=IssuePriority.CRITICAL,
                project_id=project_id,
                assignee_id=bob.id,
            ),
            alice,
        )

        assert len(audit.list_by_issue(created.id)) == 1 + 5

    def test_assignee_change_stores_names(self, issue_service, audit, alice, bob, people, project_id):
        carol = people["carol"]
        created = issue_service.create_issue(
            IssueRequest(title="Handoff", project_id=project_id, assignee_id=bob.id), alice
        )

        view = issue_service.update_issue(
            created.id,
            IssueRequest(title="Handoff", project_id=project_id, assignee_id=carol.id),
            alice,
        )

        assert view.assignee_name == "Carol"
        entry = next(
            e
            for e in audit.list_by_issue(created.id)
            if e.activity_type == ActivityType.ASSIGNEE_CHANGED
        )
        assert (entry.old_value, entry.new_value) == ("Bob", "Carol")

    def test_omitted_assignee_clears_assignment(self, issue_service, audit, alice, bob, project_id):
        created = issue_service.create_issue(
            IssueRequest(title="Owned", project_id=project_id, assignee_id=bob.id), alice
        )

        view = issue_service.update_issue(
            created.id, IssueRequest(title="Owned", project_id=project_id), alice
        )

        assert view.assignee_id is None
        assert view.assignee_name is None
        entry = next(
            e
            for e in audit.list_by_issue(created.id)
            if e.activity_type == ActivityType.ASSIGNEE_CHANGED
        )
        assert (entry.old_value, entry.new_value) == ("Bob", None)

    def test_update_missing_issue(self, issue_service, alice, project_id):
        with pytest.raises(NotFoundError, match="Issue not found"):
            issue_service.update_issue(999, IssueRequest(title="x", project_id=project_id), alice)

    def test_update_unknown_assignee(self, issue_service, alice, project_id):
        created = issue_service.create_issue(IssueRequest(title="x", project_id=project_id), alice)

        with pytest.raises(NotFoundError, match="Assignee not found"):
            issue_service.update_issue(
                created.id, IssueRequest(title="x", project_id=project_id, assignee_id=404), alice
            )


class TestDeleteIssue:
    def test_delete_removes_issue_and_publishes_snapshot(
        self, issue_service, audit, publisher, alice, project_id
    ):
        created = issue_service.create_issue(
            IssueRequest(title="Doomed", project_id=project_id, priority=IssuePriority.LOW), alice
        )

        issue_service.delete_issue(created.id)

        with pytest.raises(NotFoundError):
            issue_service.get_issue(created.id)
        assert audit.list_by_issue(created.id) == []

        deleted = publisher.events_for(ISSUES_TOPIC)[-1]
        assert deleted.event_type == EventType.DELETED
        assert deleted.issue_id == created.id
        assert deleted.title == "Doomed"
        assert deleted.priority == "LOW"
        assert deleted.project_id == project_id

    def test_delete_missing_issue(self, issue_service):
        with pytest.raises(NotFoundError):
            issue_service.delete_issue(31337)

    def test_delete_removes_comments(
        self, issue_service, comment_service, session_factory, alice, bob, project_id
    ):
        created = issue_service.create_issue(IssueRequest(title="Noisy", project_id=project_id), alice)
        comment_service.create_comment(created.id, "First", alice)
        comment_service.create_comment(created.id, "Second", bob)

        issue_service.delete_issue(created.id)

        fresh = session_factory()
        try:
            assert fresh.query(Comment).filter(Comment.issue_id == created.id).count() == 0
            assert fresh.query(ActivityLog).filter(ActivityLog.issue_id == created.id).count() == 0
        finally:
            fresh.close()
