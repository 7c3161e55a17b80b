"""WorkloadScoringPolicy — rank eligible members for a task, lower score wins."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.assignment_criteria import AssignmentCriteria
from app.domain.value_objects.enums import Difficulty, Priority, Role

logger = logging.getLogger(__name__)

CAPACITY_CEILING = 10  # assumed open tasks per person
URGENT_MULTIPLIER = 0.5
ASSIGNMENT_WEIGHT = 0.1
HOURS_BASELINE = 40.0
HOURS_WEIGHT = 0.5

HARD_ROLE_BONUS: dict[Role, float] = {
    Role.SENIOR: -0.20,
    Role.MANAGER: -0.15,
    Role.ADMIN: -0.10,
}


@dataclass(frozen=True)
class ScoredMember:
    member: TeamMember
    score: float
    active_assignments: int


def score_member(
    member: TeamMember,
    active_assignments: int,
    criteria: AssignmentCriteria,
) -> float:
    """Heuristic score for one candidate.

    score = workload_ratio * priority_multiplier
          + active_assignments * 0.1
          + (estimated_hours / 40) * 0.5
          + role_bonus

    Urgent tasks halve the workload-ratio term. Role bonus only applies to
    hard tasks and favours senior, then manager, then admin.
    """
    workload_ratio = active_assignments / CAPACITY_CEILING
    priority_multiplier = URGENT_MULTIPLIER if criteria.priority == Priority.URGENT else 1.0

    role_bonus = 0.0
    if criteria.difficulty == Difficulty.HARD:
        role_bonus = HARD_ROLE_BONUS.get(member.role, 0.0)

    return (
        workload_ratio * priority_multiplier
        + active_assignments * ASSIGNMENT_WEIGHT
        + (criteria.estimated_hours / HOURS_BASELINE) * HOURS_WEIGHT
        + role_bonus
    )


def rank_members(
    members: list[TeamMember],
    assignment_counts: dict[str, int],
    criteria: AssignmentCriteria,
) -> list[ScoredMember]:
    """Score every member in roster order. Missing counts mean no open work."""
    scored = []
    for member in members:
        active = assignment_counts.get(member.id, 0)
        scored.append(
            ScoredMember(
                member=member,
                score=score_member(member, active, criteria),
                active_assignments=active,
            )
        )
    return scored


def select_best_member(
    members: list[TeamMember],
    assignment_counts: dict[str, int],
    criteria: AssignmentCriteria,
) -> TeamMember | None:
    """Pick the member with the lowest score.

    Ties go to the earliest member in roster order, so the result is fully
    determined by the inputs. Returns None for an empty roster.
    """
    scored = rank_members(members, assignment_counts, criteria)
    if not scored:
        return None

    best = min(scored, key=lambda s: s.score)  # min() keeps the first of equal keys
    logger.debug(
        "Best candidate %s (%s): score=%.3f, %d active tasks",
        best.member.full_name, best.member.role.value,
        best.score, best.active_assignments,
    )
    return best.member
