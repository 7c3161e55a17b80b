"""MarkTaskPendingUseCase — put a task on hold and reroute it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.ports.task_repo import TaskRepository
from app.application.use_cases.auto_assign import AssignmentResult, AutoAssignmentUseCase
from app.domain.entities.task import Task
from app.domain.value_objects.enums import PendingReason, TaskStatus

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


@dataclass
class PendingTransitionResult:
    task: Task
    assignment: AssignmentResult


class MarkTaskPendingUseCase:
    def __init__(self, task_repo: TaskRepository, assigner: AutoAssignmentUseCase):
        self._tasks = task_repo
        self._assigner = assigner

    async def execute(
        self,
        task_id: str,
        reason: PendingReason,
        notes: str | None,
        actor_id: str,
    ) -> PendingTransitionResult:
        """Mark the task pending, then hand it to whoever can resolve *reason*.

        Raises:
            TaskNotFoundError: if the task does not exist.
        """
        task = await self._tasks.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        await self._tasks.mark_pending(task_id, reason, notes)
        task.status = TaskStatus.PENDING
        task.pending_reason = reason
        task.pending_notes = notes

        try:
            result = await self._assigner.assign_for_pending(
                task_id, task.team_id, reason, actor_id
            )
        except Exception as e:
            logger.exception("Pending reassignment failed for task %s", task_id)
            result = AssignmentResult.failed(str(e) or "Assignment failed")

        if not result.success:
            logger.warning("Pending task %s not rerouted: %s", task_id, result.error)

        return PendingTransitionResult(task=task, assignment=result)
