"""Assignment endpoints — direct engine calls and batch runs."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.notifications.dispatcher import CommitScopedPublisher
from app.adapters.persistence.database import get_session
from app.application.use_cases.auto_assign import AssignmentResult, AutoAssignmentUseCase
from app.application.use_cases.create_task import BatchAutoAssignUseCase
from app.domain.value_objects.assignment_criteria import AssignmentCriteria
from app.domain.value_objects.enums import Difficulty, Priority
from app.infrastructure.api.dependencies import (
    get_auto_assign_uc,
    get_batch_assign_uc,
    get_publisher,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["assignments"])


# ── Request schemas ─────────────────────────────────────────────────

class AutoAssignRequest(BaseModel):
    task_id: str
    team_id: str
    difficulty: Difficulty = Difficulty.MEDIUM
    estimated_hours: float = Field(default=0.0, ge=0)
    priority: Priority = Priority.MEDIUM
    assigned_by: str


class PendingAssignRequest(BaseModel):
    task_id: str
    team_id: str | None = None
    pending_reason: str
    assigned_by: str


# ── Endpoints ───────────────────────────────────────────────────────

@router.post("/auto")
async def auto_assign(
    body: AutoAssignRequest,
    uc: AutoAssignmentUseCase = Depends(get_auto_assign_uc),
    publisher: CommitScopedPublisher = Depends(get_publisher),
    session: AsyncSession = Depends(get_session),
):
    """Pick and record the best team member for a task."""
    criteria = AssignmentCriteria(
        team_id=body.team_id,
        difficulty=body.difficulty,
        estimated_hours=body.estimated_hours,
        priority=body.priority,
        assigned_by=body.assigned_by,
    )
    try:
        result = await uc.assign_task(body.task_id, criteria)
    except Exception as e:
        await session.rollback()
        publisher.discard()
        logger.exception("Auto-assignment of task %s failed", body.task_id)
        raise HTTPException(status_code=503, detail=str(e))

    await session.commit()
    publisher.flush()
    return result_to_dict(result)


@router.post("/pending")
async def assign_pending(
    body: PendingAssignRequest,
    uc: AutoAssignmentUseCase = Depends(get_auto_assign_uc),
    publisher: CommitScopedPublisher = Depends(get_publisher),
    session: AsyncSession = Depends(get_session),
):
    """Reroute a pending task to a reviewer, data collector or least busy member."""
    try:
        result = await uc.assign_for_pending(
            body.task_id, body.team_id, body.pending_reason, body.assigned_by
        )
    except Exception as e:
        await session.rollback()
        publisher.discard()
        logger.exception("Pending reassignment of task %s failed", body.task_id)
        raise HTTPException(status_code=503, detail=str(e))

    await session.commit()
    publisher.flush()
    return result_to_dict(result)


@router.post("/run")
async def run_batch(
    uc: BatchAutoAssignUseCase = Depends(get_batch_assign_uc),
    publisher: CommitScopedPublisher = Depends(get_publisher),
    session: AsyncSession = Depends(get_session),
):
    """Auto-assign every not-started team task. Meant for an external scheduler."""
    outcomes = await uc.execute()
    await session.commit()
    publisher.flush()

    assigned = [o for o in outcomes if o.result.success]
    return {
        "status": "ok",
        "total": len(outcomes),
        "assigned": len(assigned),
        "unassigned": len(outcomes) - len(assigned),
        "results": [
            {"task_id": o.task_id, **result_to_dict(o.result)} for o in outcomes
        ],
    }


def result_to_dict(r: AssignmentResult) -> dict:
    if not r.success:
        return {"success": False, "error": r.error}
    return {
        "success": True,
        "assigned_user_id": r.assigned_user_id,
        "assigned_user_name": r.assigned_user_name,
        "reason": r.reason,
    }
