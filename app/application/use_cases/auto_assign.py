"""AutoAssignmentUseCase — pick a team member for a new or pending task."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from app.application.ports.assignment_repo import AssignmentRepository
from app.application.ports.notification_port import NotificationPublisher
from app.application.ports.task_repo import TaskRepository
from app.application.ports.team_member_repo import TeamMemberRepository
from app.domain.entities.assignment import Assignment
from app.domain.entities.notification import AssignmentNotification
from app.domain.entities.team_member import TeamMember
from app.domain.policies.eligibility import filter_by_difficulty
from app.domain.policies.pending_routing import (
    FALLBACK_DIFFICULTY,
    FALLBACK_ESTIMATED_HOURS,
    FALLBACK_PRIORITY,
    find_data_collector,
    find_reviewer,
)
from app.domain.policies.workload_scoring import select_best_member
from app.domain.value_objects.assignment_criteria import AssignmentCriteria
from app.domain.value_objects.enums import NotificationType, PendingReason

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignmentResult:
    """Outcome of one assignment decision. Either assigned or failed, never both."""

    success: bool
    assigned_user_id: str | None = None
    assigned_user_name: str | None = None
    reason: str | None = None
    error: str | None = None

    @classmethod
    def assigned(cls, member: TeamMember, reason: str) -> AssignmentResult:
        return cls(
            success=True,
            assigned_user_id=member.id,
            assigned_user_name=member.full_name,
            reason=reason,
        )

    @classmethod
    def failed(cls, error: str) -> AssignmentResult:
        return cls(success=False, error=error)


def _value(member: Enum | str) -> str:
    return member.value if isinstance(member, Enum) else str(member)


class AutoAssignmentUseCase:
    """Selects and records the responsible team member for a task.

    Each call is an independent greedy decision. Workload counts are read once
    before scoring, so two tasks assigned at the same moment may both land on
    the same least-busy member. The score is advisory, not a capacity limit,
    and no lock is taken for it.
    """

    def __init__(
        self,
        member_repo: TeamMemberRepository,
        assignment_repo: AssignmentRepository,
        task_repo: TaskRepository,
        notifications: NotificationPublisher,
    ):
        self._members = member_repo
        self._assignments = assignment_repo
        self._tasks = task_repo
        self._notifications = notifications

    async def assign_task(self, task_id: str, criteria: AssignmentCriteria) -> AssignmentResult:
        """Auto-assign a freshly created task to the best eligible member.

        Pipeline:
        1. Load the team's active roster
        2. Filter by difficulty eligibility
        3. Count live workload
        4. Score and pick the lowest
        5. Persist a primary assignment and mark the task assigned, atomically
        6. Notify the assignee (best effort)

        "No match" outcomes come back as failed results. Store errors are
        raised to the caller.
        """
        members = await self._members.get_active_by_team(criteria.team_id)
        if not members:
            logger.warning("Task %s: team %s has no active members", task_id, criteria.team_id)
            return AssignmentResult.failed("No active team members found")

        difficulty = _value(criteria.difficulty)
        eligible = filter_by_difficulty(members, criteria.difficulty)
        if not eligible:
            logger.warning(
                "Task %s: nobody in team %s qualifies for %s tasks",
                task_id, criteria.team_id, difficulty,
            )
            return AssignmentResult.failed(
                f"No team members qualified for {difficulty} difficulty tasks"
            )

        counts = await self._assignments.count_active_by_user([m.id for m in eligible])
        best = select_best_member(eligible, counts, criteria)
        if best is None:
            logger.warning("Task %s: scoring produced no candidate", task_id)
            return AssignmentResult.failed("No suitable team member available")

        # Row insert and status change commit or roll back together.
        await self._assignments.assign_primary(
            Assignment(
                id=None,
                task_id=task_id,
                user_id=best.id,
                assigned_by=criteria.assigned_by,
                is_active=True,
                is_primary=True,
            )
        )

        logger.info(
            "Task %s → %s (%s, %s difficulty, %s priority, %d active tasks)",
            task_id, best.full_name, best.role.value, difficulty,
            _value(criteria.priority), counts.get(best.id, 0),
        )

        await self._notify(best, task_id, NotificationType.TASK_ASSIGNED)

        return AssignmentResult.assigned(
            best, reason=f"Assigned to {best.full_name} ({best.role.value} role)"
        )

    async def assign_for_pending(
        self,
        task_id: str,
        team_id: str | None,
        pending_reason: PendingReason | str,
        assigned_by: str,
    ) -> AssignmentResult:
        """Reroute a pending task to the member best placed to unblock it.

        review / clarity_needed go to a reviewer, data_missing to a data
        collector, anything else to the least busy member. The previous
        active assignments are replaced by one secondary assignment.
        """
        if team_id is None:
            return AssignmentResult.failed("No team specified")

        reason = _value(pending_reason)
        members = await self._members.get_active_by_team(team_id)
        target = await self._pick_pending_target(members, reason, team_id, assigned_by)

        if target is None:
            logger.warning("Task %s: no member to pick up pending reason %s", task_id, reason)
            return AssignmentResult.failed("No suitable team member found")

        await self._assignments.reassign(
            Assignment(
                id=None,
                task_id=task_id,
                user_id=target.id,
                assigned_by=assigned_by,
                is_active=True,
                is_primary=False,
            )
        )
        logger.info("Pending task %s (%s) → %s (%s)", task_id, reason, target.full_name, target.role.value)

        await self._notify(target, task_id, NotificationType.TASK_REASSIGNED)

        return AssignmentResult.assigned(target, reason=f"Reassigned for {reason}")

    async def _pick_pending_target(
        self,
        members: list[TeamMember],
        reason: str,
        team_id: str,
        assigned_by: str,
    ) -> TeamMember | None:
        if reason in (PendingReason.REVIEW.value, PendingReason.CLARITY_NEEDED.value):
            return find_reviewer(members)
        if reason == PendingReason.DATA_MISSING.value:
            return find_data_collector(members)

        counts = await self._assignments.count_active_by_user([m.id for m in members])
        criteria = AssignmentCriteria(
            team_id=team_id,
            difficulty=FALLBACK_DIFFICULTY,
            estimated_hours=FALLBACK_ESTIMATED_HOURS,
            priority=FALLBACK_PRIORITY,
            assigned_by=assigned_by,
        )
        return select_best_member(members, counts, criteria)

    async def _notify(
        self, member: TeamMember, task_id: str, kind: NotificationType
    ) -> None:
        """Queue the assignee notification. Failures never affect the assignment."""
        try:
            title = await self._tasks.get_title(task_id)
        except Exception:
            logger.warning("Task %s: could not load title for notification", task_id, exc_info=True)
            return

        if title is None:
            logger.info("Task %s: no title found, skipping notification", task_id)
            return

        try:
            self._notifications.publish(
                AssignmentNotification(
                    user_id=member.id, task_id=task_id, task_title=title, type=kind,
                )
            )
        except Exception:
            logger.exception("Task %s: failed to queue notification for %s", task_id, member.id)
