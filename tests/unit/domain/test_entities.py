"""Tests for domain entities and value objects."""

import pytest

from app.domain.entities.notification import AssignmentNotification
from app.domain.entities.task import Task
from app.domain.entities.team_member import TeamMember
from app.domain.value_objects.assignment_criteria import AssignmentCriteria
from app.domain.value_objects.enums import (
    Difficulty,
    NotificationType,
    Priority,
    Role,
    TaskStatus,
)


def test_criteria_rejects_negative_hours():
    with pytest.raises(ValueError, match="non-negative"):
        AssignmentCriteria(
            team_id="t", difficulty=Difficulty.EASY, estimated_hours=-1,
            priority=Priority.LOW, assigned_by="u",
        )


def test_criteria_converts_known_strings():
    criteria = AssignmentCriteria(
        team_id="t", difficulty="hard", estimated_hours=0,
        priority="urgent", assigned_by="u",
    )
    assert criteria.difficulty is Difficulty.HARD
    assert criteria.priority is Priority.URGENT


def test_criteria_keeps_unknown_strings():
    criteria = AssignmentCriteria(
        team_id="t", difficulty="extreme", estimated_hours=0,
        priority="whenever", assigned_by="u",
    )
    assert criteria.difficulty == "extreme"
    assert criteria.priority == "whenever"


def test_criteria_is_immutable():
    criteria = AssignmentCriteria(
        team_id="t", difficulty=Difficulty.EASY, estimated_hours=2,
        priority=Priority.LOW, assigned_by="u",
    )
    with pytest.raises(AttributeError):
        criteria.team_id = "other"


def test_task_defaults():
    task = Task(id=None, title="Sanctions screening", created_by="u1")
    assert task.status == TaskStatus.NOT_STARTED
    assert task.priority == Priority.MEDIUM
    assert task.difficulty == Difficulty.MEDIUM
    assert task.has_team() is False


def test_team_member_has_role():
    m = TeamMember(id="u1", full_name="Dana", role=Role.MANAGER)
    assert m.has_role(Role.MANAGER, Role.ADMIN) is True
    assert m.has_role(Role.SENIOR) is False


def test_assignment_notification_text():
    n = AssignmentNotification(user_id="u1", task_id="t1", task_title="AML audit")
    assert n.title == "Task Assigned to You"
    assert n.message == 'You have been assigned to task: "AML audit"'


def test_reassigned_notification_text():
    n = AssignmentNotification(
        user_id="u1", task_id="t1", task_title="AML audit",
        type=NotificationType.TASK_REASSIGNED,
    )
    assert "AML audit" in n.message
    assert n.title != "Task Assigned to You"
