"""In-app notification sender — writes a row to the notifications table."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.adapters.persistence.models import NotificationModel
from app.application.ports.notification_port import NotificationSender
from app.domain.entities.notification import AssignmentNotification

logger = logging.getLogger(__name__)


class SqlNotificationSender(NotificationSender):
    """Stores notifications in their own session, outside any request transaction."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def send(self, notification: AssignmentNotification) -> None:
        async with self._session_factory() as session:
            session.add(
                NotificationModel(
                    user_id=notification.user_id,
                    task_id=notification.task_id,
                    type=notification.type.value,
                    title=notification.title,
                    message=notification.message,
                )
            )
            await session.commit()
        logger.info(
            "Notification %s stored for user %s (task %s)",
            notification.type.value, notification.user_id, notification.task_id,
        )
