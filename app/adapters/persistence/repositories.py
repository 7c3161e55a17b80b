"""SQLAlchemy repository implementations."""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.models import (
    TaskAssignmentModel,
    TaskModel,
    TeamMemberModel,
    UserModel,
)
from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.task_repo import TaskRepository
from app.application.ports.team_member_repo import TeamMemberRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.task import Task
from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.enums import (
    Difficulty,
    PendingReason,
    Priority,
    Role,
    TaskStatus,
)

# ─── Mappers ─────────────────────────────────────────────────────────


def _member_to_domain(m: UserModel) -> TeamMember:
    return TeamMember(
        id=m.id,
        full_name=m.full_name,
        role=Role(m.role),
        is_active=m.is_active,
    )


def _task_to_domain(m: TaskModel) -> Task:
    return Task(
        id=m.id,
        title=m.title,
        created_by=m.created_by,
        team_id=m.team_id,
        description=m.description,
        priority=Priority(m.priority),
        difficulty=Difficulty(m.difficulty),
        estimated_hours=m.estimated_hours,
        status=TaskStatus(m.status),
        pending_reason=PendingReason(m.pending_reason) if m.pending_reason else None,
        pending_notes=m.pending_notes,
        due_date=m.due_date,
    )


def _assignment_to_domain(m: TaskAssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        task_id=m.task_id,
        user_id=m.user_id,
        assigned_by=m.assigned_by,
        is_active=m.is_active,
        is_primary=m.is_primary,
    )


def _assignment_to_model(a: Assignment) -> TaskAssignmentModel:
    return TaskAssignmentModel(
        task_id=a.task_id,
        user_id=a.user_id,
        assigned_by=a.assigned_by,
        is_active=a.is_active,
        is_primary=a.is_primary,
    )


# ─── Repositories ────────────────────────────────────────────────────


class SqlTeamMemberRepository(TeamMemberRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_active_by_team(self, team_id: str) -> list[TeamMember]:
        # Roster order (earliest member first) drives tie-breaks and fallbacks.
        result = await self._s.execute(
            select(UserModel)
            .join(TeamMemberModel, TeamMemberModel.user_id == UserModel.id)
            .where(TeamMemberModel.team_id == team_id)
            .where(UserModel.is_active.is_(True))
            .order_by(TeamMemberModel.joined_at, UserModel.id)
        )
        return [_member_to_domain(m) for m in result.scalars()]


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def assign_primary(self, assignment: Assignment) -> Assignment:
        m = _assignment_to_model(assignment)
        async with self._s.begin_nested():
            self._s.add(m)
            await self._s.flush()
            await self._s.execute(
                update(TaskModel)
                .where(TaskModel.id == assignment.task_id)
                .values(status=TaskStatus.ASSIGNED.value)
            )
        assignment.id = m.id
        return assignment

    async def count_active_by_user(self, user_ids: list[str]) -> dict[str, int]:
        if not user_ids:
            return {}
        result = await self._s.execute(
            select(TaskAssignmentModel.user_id, func.count())
            .where(TaskAssignmentModel.is_active.is_(True))
            .where(TaskAssignmentModel.user_id.in_(user_ids))
            .group_by(TaskAssignmentModel.user_id)
        )
        return {user_id: count for user_id, count in result.all()}

    async def deactivate_for_task(self, task_id: str) -> int:
        result = await self._s.execute(
            update(TaskAssignmentModel)
            .where(TaskAssignmentModel.task_id == task_id)
            .where(TaskAssignmentModel.is_active.is_(True))
            .values(is_active=False)
        )
        await self._s.flush()
        return result.rowcount

    async def reassign(self, assignment: Assignment) -> Assignment:
        m = _assignment_to_model(assignment)
        async with self._s.begin_nested():
            # Lock the task row so concurrent reassignments of the same task
            # queue up behind this transaction.
            await self._s.execute(
                select(TaskModel.id)
                .where(TaskModel.id == assignment.task_id)
                .with_for_update()
            )
            await self.deactivate_for_task(assignment.task_id)
            self._s.add(m)
            await self._s.flush()
        assignment.id = m.id
        return assignment

    async def get_active_for_task(self, task_id: str) -> list[Assignment]:
        result = await self._s.execute(
            select(TaskAssignmentModel)
            .where(TaskAssignmentModel.task_id == task_id)
            .where(TaskAssignmentModel.is_active.is_(True))
            .order_by(TaskAssignmentModel.assigned_at)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]


class SqlTaskRepository(TaskRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, task: Task) -> Task:
        m = TaskModel(
            title=task.title,
            description=task.description,
            created_by=task.created_by,
            team_id=task.team_id,
            priority=task.priority.value,
            difficulty=task.difficulty.value,
            estimated_hours=task.estimated_hours,
            status=task.status.value,
            pending_reason=task.pending_reason.value if task.pending_reason else None,
            pending_notes=task.pending_notes,
            due_date=task.due_date,
        )
        self._s.add(m)
        await self._s.flush()
        task.id = m.id
        return task

    async def get_by_id(self, task_id: str) -> Task | None:
        m = await self._s.get(TaskModel, task_id)
        return _task_to_domain(m) if m else None

    async def get_title(self, task_id: str) -> str | None:
        # Runs after the assignment is written; a failed read must not abort it.
        async with self._s.begin_nested():
            result = await self._s.execute(
                select(TaskModel.title).where(TaskModel.id == task_id)
            )
        return result.scalar_one_or_none()

    async def mark_pending(
        self, task_id: str, reason: PendingReason, notes: str | None
    ) -> None:
        await self._s.execute(
            update(TaskModel)
            .where(TaskModel.id == task_id)
            .values(
                status=TaskStatus.PENDING.value,
                pending_reason=reason.value,
                pending_notes=notes,
            )
        )
        await self._s.flush()

    async def get_unassigned(self) -> list[Task]:
        result = await self._s.execute(
            select(TaskModel)
            .where(TaskModel.status == TaskStatus.NOT_STARTED.value)
            .where(TaskModel.team_id.is_not(None))
            .order_by(TaskModel.created_at, TaskModel.id)
        )
        return [_task_to_domain(m) for m in result.scalars()]
