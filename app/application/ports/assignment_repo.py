"""Port interface for assignment persistence."""

from abc import ABC, abstractmethod

from app.domain.entities.assignment import Assignment


class AssignmentRepository(ABC):
    @abstractmethod
    async def assign_primary(self, assignment: Assignment) -> Assignment:
        """Insert *assignment* and mark its task assigned as one atomic write.

        If either step fails, neither is kept.
        """
        ...

    @abstractmethod
    async def count_active_by_user(self, user_ids: list[str]) -> dict[str, int]:
        """Count active assignment rows per user across all tasks.

        Users without active rows may be absent from the result.
        """
        ...

    @abstractmethod
    async def deactivate_for_task(self, task_id: str) -> int:
        """Mark every active row of the task inactive. Returns rows changed."""
        ...

    @abstractmethod
    async def reassign(self, assignment: Assignment) -> Assignment:
        """Atomically deactivate the task's active rows and insert *assignment*.

        Must be serialized per task so two concurrent reassignments cannot
        both leave an active row behind.
        """
        ...

    @abstractmethod
    async def get_active_for_task(self, task_id: str) -> list[Assignment]:
        ...
