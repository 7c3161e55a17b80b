"""Port interfaces for outbound assignment notifications."""

from abc import ABC, abstractmethod

from app.domain.entities.notification import AssignmentNotification


class NotificationPublisher(ABC):
    @abstractmethod
    def publish(self, notification: AssignmentNotification) -> None:
        """Hand the notification off for delivery without waiting for it."""
        ...


class NotificationSender(ABC):
    @abstractmethod
    async def send(self, notification: AssignmentNotification) -> None:
        """Deliver one notification. Raises on delivery failure."""
        ...
