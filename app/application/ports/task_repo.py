"""Port interface for task persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.task import Task
from app.domain.value_objects.enums import PendingReason


class TaskRepository(ABC):
    @abstractmethod
    async def save(self, task: Task) -> Task:
        ...

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Task | None:
        ...

    @abstractmethod
    async def get_title(self, task_id: str) -> str | None:
        ...

    @abstractmethod
    async def mark_pending(
        self, task_id: str, reason: PendingReason, notes: str | None
    ) -> None:
        ...

    @abstractmethod
    async def get_unassigned(self) -> list[Task]:
        """Return not-started tasks that belong to a team, oldest first."""
        ...
