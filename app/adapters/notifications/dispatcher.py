"""Asynchronous notification dispatch, decoupled from assignment commits."""

from __future__ import annotations

import asyncio
import logging

from app.application.ports.notification_port import NotificationPublisher, NotificationSender
from app.domain.entities.notification import AssignmentNotification

logger = logging.getLogger(__name__)


class NotificationDispatcher(NotificationPublisher):
    """Queue-backed background worker delivering notifications.

    publish() only enqueues, so delivery latency and failures stay out of the
    request path. Failed sends are retried with a linear backoff and dropped
    with an error log after the last attempt.
    """

    def __init__(
        self,
        sender: NotificationSender,
        max_queue_size: int = 1000,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
    ):
        self._sender = sender
        self._queue: asyncio.Queue[AssignmentNotification] = asyncio.Queue(maxsize=max_queue_size)
        self._max_attempts = max(1, max_attempts)
        self._retry_delay = retry_delay
        self._worker: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def is_running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def publish(self, notification: AssignmentNotification) -> None:
        try:
            self._queue.put_nowait(notification)
        except asyncio.QueueFull:
            logger.error(
                "Notification queue full, dropping %s for user %s",
                notification.type.value, notification.user_id,
            )

    def start(self) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.create_task(self._run(), name="notification-dispatcher")
            logger.info("Notification dispatcher started")

    async def stop(self) -> None:
        """Deliver what is already queued, then stop the worker."""
        if self._worker is None:
            return
        await self._queue.join()
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("Notification dispatcher stopped")

    async def drain(self) -> None:
        """Deliver everything queued right now, in the caller's task."""
        while not self._queue.empty():
            notification = self._queue.get_nowait()
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()

    async def _run(self) -> None:
        while True:
            notification = await self._queue.get()
            try:
                await self._deliver(notification)
            finally:
                self._queue.task_done()

    async def _deliver(self, notification: AssignmentNotification) -> bool:
        for attempt in range(1, self._max_attempts + 1):
            try:
                await self._sender.send(notification)
                return True
            except Exception:
                logger.warning(
                    "Notification to %s failed (attempt %d/%d)",
                    notification.user_id, attempt, self._max_attempts,
                    exc_info=True,
                )
                if attempt < self._max_attempts:
                    await asyncio.sleep(self._retry_delay * attempt)

        logger.error(
            "Giving up on %s notification for user %s (task %s)",
            notification.type.value, notification.user_id, notification.task_id,
        )
        return False


class CommitScopedPublisher(NotificationPublisher):
    """Request-scoped buffer released only after the transaction commits."""

    def __init__(self, target: NotificationPublisher):
        self._target = target
        self._buffer: list[AssignmentNotification] = []

    @property
    def buffered(self) -> list[AssignmentNotification]:
        return list(self._buffer)

    def publish(self, notification: AssignmentNotification) -> None:
        self._buffer.append(notification)

    def flush(self) -> int:
        """Forward buffered notifications. Call right after a successful commit."""
        count = len(self._buffer)
        for notification in self._buffer:
            self._target.publish(notification)
        self._buffer.clear()
        return count

    def discard(self) -> None:
        """Drop buffered notifications. Call on rollback."""
        if self._buffer:
            logger.info("Discarding %d notifications after rollback", len(self._buffer))
        self._buffer.clear()


class NullPublisher(NotificationPublisher):
    """Used when notifications are disabled."""

    def publish(self, notification: AssignmentNotification) -> None:
        logger.debug("Notifications disabled, not sending to %s", notification.user_id)
