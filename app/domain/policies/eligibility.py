"""EligibilityPolicy — which roles may take a task of a given difficulty."""

from __future__ import annotations

from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.enums import Difficulty, Role

# data_collector is in no tier: collectors are only reached through pending rerouting.
DIFFICULTY_ROLES: dict[Difficulty, frozenset[Role]] = {
    Difficulty.EASY: frozenset({Role.EMPLOYEE}),
    Difficulty.MEDIUM: frozenset({Role.ADMIN, Role.MANAGER, Role.SENIOR, Role.EMPLOYEE}),
    Difficulty.HARD: frozenset({Role.ADMIN, Role.MANAGER, Role.SENIOR}),
}

DEFAULT_ROLES: frozenset[Role] = frozenset({Role.EMPLOYEE})


def eligible_roles(difficulty: Difficulty | str) -> frozenset[Role]:
    """Roles allowed for *difficulty*; unknown difficulties fall back to employee only."""
    return DIFFICULTY_ROLES.get(difficulty, DEFAULT_ROLES)


def filter_by_difficulty(
    members: list[TeamMember],
    difficulty: Difficulty | str,
) -> list[TeamMember]:
    """Keep active members whose role qualifies, preserving roster order."""
    allowed = eligible_roles(difficulty)
    return [m for m in members if m.is_active and m.role in allowed]
