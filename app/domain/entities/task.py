"""Task entity — a unit of compliance work owned by a team."""

from dataclasses import dataclass
from datetime import date

from app.domain.value_objects.enums import (
    Difficulty,
    PendingReason,
    Priority,
    TaskStatus,
)


@dataclass
class Task:
    id: str | None
    title: str
    created_by: str | None
    team_id: str | None = None
    description: str | None = None
    priority: Priority = Priority.MEDIUM
    difficulty: Difficulty = Difficulty.MEDIUM
    estimated_hours: float = 0.0
    status: TaskStatus = TaskStatus.NOT_STARTED
    pending_reason: PendingReason | None = None
    pending_notes: str | None = None
    due_date: date | None = None

    def has_team(self) -> bool:
        return bool(self.team_id)
