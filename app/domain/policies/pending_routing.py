"""PendingRoutingPolicy — who picks up a task that went pending."""

from __future__ import annotations

from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.enums import Difficulty, Priority, Role

# Criteria used for pending reasons that have no dedicated target role
FALLBACK_DIFFICULTY = Difficulty.MEDIUM
FALLBACK_PRIORITY = Priority.MEDIUM
FALLBACK_ESTIMATED_HOURS = 0.0


def find_reviewer(members: list[TeamMember]) -> TeamMember | None:
    """Senior first, then manager or admin, then whoever is first on the roster.

    The last fallback ignores role on purpose: a pending task must always land
    on someone.
    """
    senior = next((m for m in members if m.has_role(Role.SENIOR)), None)
    if senior:
        return senior

    manager_or_admin = next(
        (m for m in members if m.has_role(Role.MANAGER, Role.ADMIN)), None
    )
    if manager_or_admin:
        return manager_or_admin

    return members[0] if members else None


def find_data_collector(members: list[TeamMember]) -> TeamMember | None:
    """Data collector first, then whoever is first on the roster."""
    collector = next((m for m in members if m.has_role(Role.DATA_COLLECTOR)), None)
    if collector:
        return collector
    return members[0] if members else None
