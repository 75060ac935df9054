"""
Tests for book notifications.

Redis is replaced by a MagicMock handed in through client_factory.
"""

import json
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from reading_log.config import Settings
from reading_log.services import notifications
from reading_log.services.notifications import (
    Event,
    EventPublisher,
    EventType,
    NullNotifier,
    get_notifier,
)
from tests.fakes import make_record


class TestEvent:
    """Tests for event serialization."""

    def test_to_json(self):
        record = make_record(2, title="Dune", reading_time_in_days=10)
        event = Event(type=EventType.BOOK_CREATED, data=record.to_payload())

        message = json.loads(event.to_json())

        assert message["type"] == "book.created"
        assert message["data"]["title"] == "Dune"
        assert message["data"]["readingTimeInDays"] == 10
        assert "timestamp" in message


class TestEventPublisher:
    """Tests for publishing to Redis."""

    def test_publish_sends_to_channel(self):
        client = MagicMock()
        client.publish.return_value = 1
        publisher = EventPublisher("books", client_factory=lambda: client)

        publisher.publish(make_record(7, title="Emma"))

        channel, payload = client.publish.call_args.args
        assert channel == "books"
        assert json.loads(payload)["data"]["id"] == 7

    def test_publish_event_result(self):
        client = MagicMock()
        publisher = EventPublisher("books", client_factory=lambda: client)
        event = Event(type=EventType.BOOK_CREATED, data={"id": 1})

        assert publisher.publish_event(event) is True

    def test_redis_unavailable(self, caplog):
        publisher = EventPublisher("books", client_factory=lambda: None)

        publisher.publish(make_record(1))

        assert "Redis unavailable" in caplog.text

    def test_publish_error_is_swallowed(self):
        client = MagicMock()
        client.publish.side_effect = RedisConnectionError("connection refused")
        publisher = EventPublisher("books", client_factory=lambda: client)

        # Must not raise
        publisher.publish(make_record(1))

        event = Event(type=EventType.BOOK_CREATED, data={"id": 1})
        assert publisher.publish_event(event) is False


class TestGetNotifier:
    """Tests for the configured notifier."""

    @pytest.fixture
    def use_settings(self, monkeypatch):
        def apply(**overrides):
            settings = Settings(**overrides)
            monkeypatch.setattr(notifications, "get_settings", lambda: settings)
        return apply

    def test_disabled(self, use_settings):
        use_settings(notifications_enabled=False)

        assert isinstance(get_notifier(), NullNotifier)

    def test_enabled(self, use_settings):
        use_settings(notifications_enabled=True, notification_channel="my_channel")

        notifier = get_notifier()

        assert isinstance(notifier, EventPublisher)
        assert notifier.channel == "my_channel"

    def test_null_notifier_does_nothing(self):
        NullNotifier().publish(make_record(1))
