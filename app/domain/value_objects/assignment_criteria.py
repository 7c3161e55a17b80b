"""AssignmentCriteria value object — input contract for one assignment decision."""

from dataclasses import dataclass

from app.domain.value_objects.enums import Difficulty, Priority


def _coerce(enum_cls, value):
    """Known strings become enum members; unknown ones are kept as given."""
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class AssignmentCriteria:
    team_id: str
    difficulty: Difficulty | str
    estimated_hours: float
    priority: Priority | str
    assigned_by: str

    def __post_init__(self) -> None:
        if self.estimated_hours < 0:
            raise ValueError(
                f"estimated_hours must be non-negative, got {self.estimated_hours}"
            )
        object.__setattr__(self, "difficulty", _coerce(Difficulty, self.difficulty))
        object.__setattr__(self, "priority", _coerce(Priority, self.priority))
