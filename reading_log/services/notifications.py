"""
Book Notifications

After a book is created, a `book.created` event is published on a Redis
pub/sub channel. Subscribers (an email sender, a dashboard) pick it up from
there.

Publishing is fire-and-forget:
- it runs as a FastAPI background task, after the response is built
- Redis being down, or any publishing error, is logged and swallowed
- nothing is retried

Usage:
    from reading_log.services.notifications import get_notifier

    notifier = get_notifier()
    notifier.publish(record)
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Callable, Protocol

import redis

from reading_log.config import get_settings
from reading_log.schemas.book import BookRecord
from reading_log.services.redis_client import get_redis_client

logger = logging.getLogger(__name__)


class EventType(StrEnum):
    """Types of events that can be published."""

    BOOK_CREATED = "book.created"


@dataclass
class Event:
    """
    An event to be published.

    Attributes:
        type: The event type
        data: Event payload (camelCase book fields)
        timestamp: When the event occurred
    """

    type: EventType
    data: dict[str, Any]
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        """Convert event to dictionary for JSON serialization."""
        return {
            "type": self.type.value,
            "data": self.data,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert event to JSON string."""
        return json.dumps(self.to_dict())


class Notifier(Protocol):
    """One-way announcement of a newly created book."""

    def publish(self, record: BookRecord) -> None:
        ...


class EventPublisher:
    """
    Publishes book events to a Redis pub/sub channel.

    Args:
        channel: Redis channel name
        client_factory: Returns a Redis client, or None when unavailable
    """

    def __init__(
        self,
        channel: str,
        client_factory: Callable[[], redis.Redis | None] = get_redis_client,
    ) -> None:
        self.channel = channel
        self._client_factory = client_factory

    def publish(self, record: BookRecord) -> None:
        """Announce a created book. Never raises."""
        event = Event(type=EventType.BOOK_CREATED, data=record.to_payload())
        self.publish_event(event)

    def publish_event(self, event: Event) -> bool:
        """
        Publish an event.

        Returns:
            True if Redis accepted the message, False otherwise
        """
        try:
            client = self._client_factory()
            if client is None:
                logger.warning(f"Redis unavailable, dropping {event.type.value} event")
                return False
            receivers = client.publish(self.channel, event.to_json())
        except Exception as e:
            logger.warning(f"Failed to publish {event.type.value} event: {e}")
            return False

        logger.debug(f"Published {event.type.value} to '{self.channel}': {receivers} subscribers")
        return True


class NullNotifier:
    """Notifier used when notifications are disabled."""

    def publish(self, record: BookRecord) -> None:
        logger.debug(f"Notifications disabled, not announcing book {record.id}")


def get_notifier() -> Notifier:
    """Build the notifier configured by settings."""
    settings = get_settings()
    if not settings.notifications_enabled:
        return NullNotifier()
    return EventPublisher(channel=settings.notification_channel)
