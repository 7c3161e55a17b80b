"""Task endpoints — creation with auto-assignment, pending transitions."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.notifications.dispatcher import CommitScopedPublisher
from app.adapters.persistence.database import get_session
from app.adapters.persistence.repositories import SqlAssignmentRepository
from app.application.use_cases.create_task import CreateTaskUseCase
from app.application.use_cases.mark_pending import MarkTaskPendingUseCase, TaskNotFoundError
from app.domain.entities.task import Task
from app.domain.value_objects.enums import Difficulty, PendingReason, Priority
from app.infrastructure.api.dependencies import (
    get_assignment_repo,
    get_create_task_uc,
    get_mark_pending_uc,
    get_publisher,
)
from app.infrastructure.api.routes_assignments import result_to_dict

router = APIRouter(prefix="/tasks", tags=["tasks"])


class CreateTaskRequest(BaseModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = None
    created_by: str
    team_id: str | None = None
    priority: Priority = Priority.MEDIUM
    difficulty: Difficulty = Difficulty.MEDIUM
    estimated_hours: float = Field(default=0.0, ge=0)
    due_date: date | None = None
    auto_assign: bool = True


class PendingRequest(BaseModel):
    reason: PendingReason
    notes: str | None = None
    actor_id: str


@router.post("", status_code=201)
async def create_task(
    body: CreateTaskRequest,
    uc: CreateTaskUseCase = Depends(get_create_task_uc),
    publisher: CommitScopedPublisher = Depends(get_publisher),
    session: AsyncSession = Depends(get_session),
):
    """Create a task; when it names a team, try to auto-assign it."""
    task = Task(
        id=None,
        title=body.title,
        created_by=body.created_by,
        team_id=body.team_id,
        description=body.description,
        priority=body.priority,
        difficulty=body.difficulty,
        estimated_hours=body.estimated_hours,
        due_date=body.due_date,
    )
    result = await uc.execute(task, auto_assign=body.auto_assign)
    await session.commit()
    publisher.flush()

    return {
        "task": _task_to_dict(result.task),
        "assignment": result_to_dict(result.assignment) if result.assignment else None,
    }


@router.post("/{task_id}/pending")
async def mark_pending(
    task_id: str,
    body: PendingRequest,
    uc: MarkTaskPendingUseCase = Depends(get_mark_pending_uc),
    publisher: CommitScopedPublisher = Depends(get_publisher),
    session: AsyncSession = Depends(get_session),
):
    """Put a task on hold and reroute it to whoever can unblock it."""
    try:
        result = await uc.execute(task_id, body.reason, body.notes, body.actor_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")

    await session.commit()
    publisher.flush()

    return {
        "task": _task_to_dict(result.task),
        "assignment": result_to_dict(result.assignment),
    }


@router.get("/{task_id}/assignments")
async def list_active_assignments(
    task_id: str,
    repo: SqlAssignmentRepository = Depends(get_assignment_repo),
):
    """Who is currently responsible for the task."""
    assignments = await repo.get_active_for_task(task_id)
    return {
        "task_id": task_id,
        "assignments": [
            {
                "id": a.id,
                "user_id": a.user_id,
                "assigned_by": a.assigned_by,
                "is_primary": a.is_primary,
            }
            for a in assignments
        ],
    }


def _task_to_dict(t: Task) -> dict:
    return {
        "id": t.id,
        "title": t.title,
        "description": t.description,
        "created_by": t.created_by,
        "team_id": t.team_id,
        "priority": t.priority.value,
        "difficulty": t.difficulty.value,
        "estimated_hours": t.estimated_hours,
        "status": t.status.value,
        "pending_reason": t.pending_reason.value if t.pending_reason else None,
        "pending_notes": t.pending_notes,
        "due_date": t.due_date.isoformat() if t.due_date else None,
    }
