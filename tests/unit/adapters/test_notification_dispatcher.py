"""Tests for the notification dispatcher and commit-scoped publisher."""

from __future__ import annotations

import pytest

from app.adapters.notifications.dispatcher import (
    CommitScopedPublisher,
    NotificationDispatcher,
    NullPublisher,
)
from app.application.ports.notification_port import NotificationSender
from app.domain.entities.notification import AssignmentNotification


class FlakySender(NotificationSender):
    """Fails the first *failures* sends, then records deliveries."""

    def __init__(self, failures: int = 0):
        self.failures = failures
        self.calls = 0
        self.delivered: list[AssignmentNotification] = []

    async def send(self, notification):
        self.calls += 1
        if self.calls <= self.failures:
            raise ConnectionError("smtp down")
        self.delivered.append(notification)


class ListPublisher:
    def __init__(self):
        self.published = []

    def publish(self, notification):
        self.published.append(notification)


def _note(user_id: str = "u1") -> AssignmentNotification:
    return AssignmentNotification(user_id=user_id, task_id="t1", task_title="AML audit")


# ─── NotificationDispatcher ─────────────────────────────────────────


@pytest.mark.asyncio
async def test_drain_delivers_queued():
    sender = FlakySender()
    dispatcher = NotificationDispatcher(sender, retry_delay=0)
    dispatcher.publish(_note("u1"))
    dispatcher.publish(_note("u2"))
    assert dispatcher.pending == 2

    await dispatcher.drain()

    assert [n.user_id for n in sender.delivered] == ["u1", "u2"]
    assert dispatcher.pending == 0


@pytest.mark.asyncio
async def test_retries_until_success():
    sender = FlakySender(failures=2)
    dispatcher = NotificationDispatcher(sender, max_attempts=3, retry_delay=0)
    dispatcher.publish(_note())

    await dispatcher.drain()

    assert sender.calls == 3
    assert len(sender.delivered) == 1


@pytest.mark.asyncio
async def test_gives_up_after_max_attempts():
    sender = FlakySender(failures=10)
    dispatcher = NotificationDispatcher(sender, max_attempts=2, retry_delay=0)
    dispatcher.publish(_note())

    await dispatcher.drain()

    assert sender.calls == 2
    assert sender.delivered == []
    assert dispatcher.pending == 0


def test_full_queue_drops_without_raising():
    dispatcher = NotificationDispatcher(FlakySender(), max_queue_size=1)
    dispatcher.publish(_note("u1"))
    dispatcher.publish(_note("u2"))

    assert dispatcher.pending == 1


@pytest.mark.asyncio
async def test_worker_delivers_and_stops():
    sender = FlakySender()
    dispatcher = NotificationDispatcher(sender, retry_delay=0)
    assert dispatcher.is_running is False
    dispatcher.start()
    assert dispatcher.is_running is True
    dispatcher.publish(_note())

    await dispatcher.stop()

    assert len(sender.delivered) == 1
    assert dispatcher.is_running is False


@pytest.mark.asyncio
async def test_stop_without_start_is_noop():
    await NotificationDispatcher(FlakySender()).stop()


# ─── CommitScopedPublisher ──────────────────────────────────────────


def test_buffer_held_until_flush():
    target = ListPublisher()
    publisher = CommitScopedPublisher(target)
    publisher.publish(_note("u1"))
    publisher.publish(_note("u2"))

    assert target.published == []
    assert len(publisher.buffered) == 2

    assert publisher.flush() == 2
    assert [n.user_id for n in target.published] == ["u1", "u2"]
    assert publisher.buffered == []


def test_discard_drops_buffer():
    target = ListPublisher()
    publisher = CommitScopedPublisher(target)
    publisher.publish(_note())

    publisher.discard()

    assert publisher.flush() == 0
    assert target.published == []


def test_null_publisher_accepts_anything():
    NullPublisher().publish(_note())
