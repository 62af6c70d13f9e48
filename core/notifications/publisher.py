"""
Notification publishers.

Publishing is best-effort: a failure is logged and swallowed so it never
undoes the mutation that triggered it. There is no retry.

Usage:
    from core.notifications import get_publisher

    publisher = get_publisher()
    publisher.publish(ISSUES_TOPIC, IssueEvent(event_type=EventType.CREATED, issue_id=1))
"""

from functools import lru_cache

import redis

from core.config import get_settings
from core.logging import notification_logger as logger

from .events import DomainEvent


class NotificationPublisher:
    """Base publisher; subclasses implement _send."""

    def publish(self, topic: str, event: DomainEvent) -> bool:
        """
        Send an event to every subscriber of a topic.

        Returns:
            True if the transport accepted the event, False otherwise
        """
        try:
            self._send(topic, event)
        except Exception as e:
            logger.warning(
                "notification_publish_failed",
                topic=topic,
                event_type=event.event_type.value,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False
        logger.debug("notification_published", topic=topic, event_type=event.event_type.value)
        return True

    def _send(self, topic: str, event: DomainEvent) -> None:
        raise NotImplementedError


class RedisNotificationPublisher(NotificationPublisher):
    """
    Publishes events as JSON with Redis PUBLISH, one channel per topic.

    The connection pool is created lazily so constructing the publisher
    never touches the network.
    """

    def __init__(self, url: str | None = None, max_connections: int = 50):
        self._url = url or get_settings().redis_url
        self._max_connections = max_connections
        self._pool: redis.ConnectionPool | None = None

    @property
    def client(self) -> redis.Redis:
        if self._pool is None:
            self._pool = redis.ConnectionPool.from_url(
                self._url,
                max_connections=self._max_connections,
                socket_timeout=5,
                socket_connect_timeout=5,
            )
            logger.info("redis_pool_created", max_connections=self._max_connections)
        return redis.Redis(connection_pool=self._pool)

    def _send(self, topic: str, event: DomainEvent) -> None:
        self.client.publish(topic, event.to_json())

    def ping(self) -> bool:
        """Check the broker is reachable."""
        try:
            return bool(self.client.ping())
        except redis.RedisError as e:
            logger.warning("redis_connection_failed", error=str(e))
            return False


class InMemoryNotificationPublisher(NotificationPublisher):
    """Keeps published (topic, event) pairs in order; for local runs and tests."""

    def __init__(self):
        self.published: list[tuple[str, DomainEvent]] = []

    def _send(self, topic: str, event: DomainEvent) -> None:
        self.published.append((topic, event))

    def events_for(self, topic: str) -> list[DomainEvent]:
        return [event for t, event in self.published if t == topic]


@lru_cache(maxsize=1)
def get_publisher() -> NotificationPublisher:
    """Publisher selected by the NOTIFICATION_BACKEND setting."""
    settings = get_settings()
    if settings.notification_backend == "redis":
        return RedisNotificationPublisher(settings.redis_url)
    return InMemoryNotificationPublisher()
