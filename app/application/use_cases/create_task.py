"""CreateTaskUseCase — store a task and try to auto-assign it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.application.ports.task_repo import TaskRepository
from app.application.use_cases.auto_assign import AssignmentResult, AutoAssignmentUseCase
from app.domain.entities.task import Task
from app.domain.value_objects.assignment_criteria import AssignmentCriteria
from app.domain.value_objects.enums import TaskStatus

logger = logging.getLogger(__name__)


@dataclass
class TaskCreationResult:
    task: Task
    assignment: AssignmentResult | None  # None when auto-assignment was not attempted


@dataclass
class BatchAssignmentOutcome:
    task_id: str
    result: AssignmentResult


def _criteria_for(task: Task) -> AssignmentCriteria:
    return AssignmentCriteria(
        team_id=task.team_id,
        difficulty=task.difficulty,
        estimated_hours=task.estimated_hours,
        priority=task.priority,
        assigned_by=task.created_by,
    )


async def _assign_safely(
    assigner: AutoAssignmentUseCase, task: Task
) -> AssignmentResult:
    """Run auto-assignment, turning store errors into a failed result.

    A failed assignment must never undo task creation; the task simply stays
    unassigned for someone to pick up by hand.
    """
    try:
        return await assigner.assign_task(task.id, _criteria_for(task))
    except Exception as e:
        logger.exception("Auto-assignment failed for task %s", task.id)
        return AssignmentResult.failed(str(e) or "Assignment failed")


class CreateTaskUseCase:
    """Creates a task and, when it names a team, auto-assigns it."""

    def __init__(self, task_repo: TaskRepository, assigner: AutoAssignmentUseCase):
        self._tasks = task_repo
        self._assigner = assigner

    async def execute(self, task: Task, auto_assign: bool = True) -> TaskCreationResult:
        task.status = TaskStatus.NOT_STARTED
        task = await self._tasks.save(task)
        logger.info("Task %s created (team=%s)", task.id, task.team_id)

        if not auto_assign or not task.has_team():
            return TaskCreationResult(task=task, assignment=None)

        result = await _assign_safely(self._assigner, task)
        if result.success:
            task.status = TaskStatus.ASSIGNED
        else:
            logger.warning("Task %s left unassigned: %s", task.id, result.error)

        return TaskCreationResult(task=task, assignment=result)


class BatchAutoAssignUseCase:
    """Assign every not-started team task that has no owner yet."""

    def __init__(self, task_repo: TaskRepository, assigner: AutoAssignmentUseCase):
        self._tasks = task_repo
        self._assigner = assigner

    async def execute(self) -> list[BatchAssignmentOutcome]:
        tasks = await self._tasks.get_unassigned()
        logger.info("Batch assigning %d unassigned tasks", len(tasks))

        outcomes = []
        for task in tasks:
            result = await _assign_safely(self._assigner, task)
            outcomes.append(BatchAssignmentOutcome(task_id=task.id, result=result))

        successful = sum(1 for o in outcomes if o.result.success)
        logger.info("Batch complete: %d/%d assigned", successful, len(outcomes))
        return outcomes
