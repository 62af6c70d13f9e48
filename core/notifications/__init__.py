"""Real-time notification events and publishers."""

from .events import ActivityEvent, CommentEvent, DomainEvent, EventType, IssueEvent
from .publisher import (
    InMemoryNotificationPublisher,
    NotificationPublisher,
    RedisNotificationPublisher,
    get_publisher,
)

__all__ = [
    "ActivityEvent",
    "CommentEvent",
    "DomainEvent",
    "EventType",
    "IssueEvent",
    "InMemoryNotificationPublisher",
    "NotificationPublisher",
    "RedisNotificationPublisher",
    "get_publisher",
]
