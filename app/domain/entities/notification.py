"""AssignmentNotification — outbound message telling a user about new work."""

from dataclasses import dataclass

from app.domain.value_objects.enums import NotificationType

_TITLES = {
    NotificationType.TASK_ASSIGNED: "Task Assigned to You",
    NotificationType.TASK_REASSIGNED: "Task Routed to You",
}


@dataclass(frozen=True)
class AssignmentNotification:
    user_id: str
    task_id: str
    task_title: str
    type: NotificationType = NotificationType.TASK_ASSIGNED

    @property
    def title(self) -> str:
        return _TITLES[self.type]

    @property
    def message(self) -> str:
        if self.type == NotificationType.TASK_REASSIGNED:
            return f'A pending task needs your attention: "{self.task_title}"'
        return f'You have been assigned to task: "{self.task_title}"'
