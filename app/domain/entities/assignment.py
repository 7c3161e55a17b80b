"""Assignment entity — one row of task ownership history."""

from dataclasses import dataclass


@dataclass
class Assignment:
    id: str | None
    task_id: str
    user_id: str
    assigned_by: str | None
    is_active: bool = True
    is_primary: bool = True  # False for reroutes of pending tasks
