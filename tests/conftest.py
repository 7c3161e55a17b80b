"""Pytest configuration and shared in-memory fakes."""

from __future__ import annotations

import asyncio
from collections import defaultdict

import pytest

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.notification_port import NotificationPublisher
from app.application.ports.task_repo import TaskRepository
from app.application.ports.team_member_repo import TeamMemberRepository
from app.application.use_cases.auto_assign import AutoAssignmentUseCase
from app.domain.entities.assignment import Assignment
from app.domain.entities.notification import AssignmentNotification
from app.domain.entities.task import Task
from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.enums import TaskStatus

# ─── In-memory fakes ────────────────────────────────────────────────


class StoreUnavailable(RuntimeError):
    pass


class FakeTeamMemberRepo(TeamMemberRepository):
    def __init__(self):
        self.rosters: dict[str, list[TeamMember]] = {}
        self.fail = False

    async def get_active_by_team(self, team_id):
        if self.fail:
            raise StoreUnavailable("roster store unreachable")
        return [m for m in self.rosters.get(team_id, []) if m.is_active]


class FakeAssignmentRepo(AssignmentRepository):
    def __init__(self, tasks: dict[str, Task]):
        self.rows: list[Assignment] = []
        self.fail_on_save = False
        self.fail_status_update = False
        self._tasks = tasks
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _insert(self, assignment):
        assignment.id = f"a{len(self.rows) + 1}"
        self.rows.append(assignment)
        return assignment

    async def assign_primary(self, assignment):
        if self.fail_on_save:
            raise StoreUnavailable("insert rejected")
        self._insert(assignment)
        if self.fail_status_update:
            self.rows.remove(assignment)  # savepoint rolled back
            raise StoreUnavailable("update rejected")
        if assignment.task_id in self._tasks:
            self._tasks[assignment.task_id].status = TaskStatus.ASSIGNED
        return assignment

    async def count_active_by_user(self, user_ids):
        counts: dict[str, int] = {}
        for row in self.rows:
            if row.is_active and row.user_id in user_ids:
                counts[row.user_id] = counts.get(row.user_id, 0) + 1
        return counts

    async def deactivate_for_task(self, task_id):
        changed = 0
        for row in self.rows:
            if row.task_id == task_id and row.is_active:
                row.is_active = False
                changed += 1
        return changed

    async def reassign(self, assignment):
        async with self._locks[assignment.task_id]:
            await self.deactivate_for_task(assignment.task_id)
            await asyncio.sleep(0)  # let a competing reassignment try to interleave
            return self._insert(assignment)

    async def get_active_for_task(self, task_id):
        return [r for r in self.rows if r.task_id == task_id and r.is_active]

    def seed_active(self, task_id, user_id, count=1):
        for _ in range(count):
            self._insert(Assignment(id=None, task_id=task_id, user_id=user_id, assigned_by=None))


class FakeTaskRepo(TaskRepository):
    def __init__(self):
        self.tasks: dict[str, Task] = {}
        self.fail_title = False

    async def save(self, task):
        task.id = task.id or f"task-{len(self.tasks) + 1}"
        self.tasks[task.id] = task
        return task

    async def get_by_id(self, task_id):
        return self.tasks.get(task_id)

    async def get_title(self, task_id):
        if self.fail_title:
            raise StoreUnavailable("title lookup failed")
        task = self.tasks.get(task_id)
        return task.title if task else None

    async def mark_pending(self, task_id, reason, notes):
        task = self.tasks[task_id]
        task.status = TaskStatus.PENDING
        task.pending_reason = reason
        task.pending_notes = notes

    async def get_unassigned(self):
        return [
            t for t in self.tasks.values()
            if t.status == TaskStatus.NOT_STARTED and t.team_id
        ]


class RecordingPublisher(NotificationPublisher):
    def __init__(self):
        self.published: list[AssignmentNotification] = []
        self.fail = False

    def publish(self, notification):
        if self.fail:
            raise RuntimeError("queue closed")
        self.published.append(notification)


class FakeStore:
    """Bundle of fakes plus a factory for the assignment use case."""

    def __init__(self):
        self.members = FakeTeamMemberRepo()
        self.tasks = FakeTaskRepo()
        self.assignments = FakeAssignmentRepo(self.tasks.tasks)
        self.publisher = RecordingPublisher()

    def add_team(self, team_id: str, members: list[TeamMember]) -> None:
        self.members.rosters[team_id] = list(members)

    def add_task(self, task_id: str, title: str = "Quarterly KYC review", **kwargs) -> Task:
        task = Task(id=task_id, title=title, created_by="creator", **kwargs)
        self.tasks.tasks[task_id] = task
        return task

    def active_rows(self, task_id: str) -> list[Assignment]:
        return [r for r in self.assignments.rows if r.task_id == task_id and r.is_active]

    def auto_assign(self) -> AutoAssignmentUseCase:
        return AutoAssignmentUseCase(
            member_repo=self.members,
            assignment_repo=self.assignments,
            task_repo=self.tasks,
            notifications=self.publisher,
        )


# ─── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()
