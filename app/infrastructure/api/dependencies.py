"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.notifications.dispatcher import (
    CommitScopedPublisher,
    NotificationDispatcher,
    NullPublisher,
)
from app.adapters.notifications.sql_sender import SqlNotificationSender
from app.adapters.persistence.database import async_session_factory, get_session
from app.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlTaskRepository,
    SqlTeamMemberRepository,
)
from app.application.ports.notification_port import NotificationPublisher
from app.application.use_cases.auto_assign import AutoAssignmentUseCase
from app.application.use_cases.create_task import BatchAutoAssignUseCase, CreateTaskUseCase
from app.application.use_cases.mark_pending import MarkTaskPendingUseCase
from app.application.use_cases.team_workload import GetTeamWorkloadUseCase
from app.config import settings

# Singleton dispatcher, started/stopped by the app lifespan
dispatcher = NotificationDispatcher(
    SqlNotificationSender(async_session_factory),
    max_queue_size=settings.notification_queue_size,
    max_attempts=settings.notification_max_attempts,
    retry_delay=settings.notification_retry_delay_seconds,
)


def get_notification_target() -> NotificationPublisher:
    return dispatcher if settings.notifications_enabled else NullPublisher()


def get_publisher(
    target: NotificationPublisher = Depends(get_notification_target),
) -> CommitScopedPublisher:
    return CommitScopedPublisher(target)


def get_auto_assign_uc(
    session: AsyncSession = Depends(get_session),
    publisher: CommitScopedPublisher = Depends(get_publisher),
) -> AutoAssignmentUseCase:
    return AutoAssignmentUseCase(
        member_repo=SqlTeamMemberRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
        task_repo=SqlTaskRepository(session),
        notifications=publisher,
    )


def get_create_task_uc(
    session: AsyncSession = Depends(get_session),
    assigner: AutoAssignmentUseCase = Depends(get_auto_assign_uc),
) -> CreateTaskUseCase:
    return CreateTaskUseCase(task_repo=SqlTaskRepository(session), assigner=assigner)


def get_mark_pending_uc(
    session: AsyncSession = Depends(get_session),
    assigner: AutoAssignmentUseCase = Depends(get_auto_assign_uc),
) -> MarkTaskPendingUseCase:
    return MarkTaskPendingUseCase(task_repo=SqlTaskRepository(session), assigner=assigner)


def get_batch_assign_uc(
    session: AsyncSession = Depends(get_session),
    assigner: AutoAssignmentUseCase = Depends(get_auto_assign_uc),
) -> BatchAutoAssignUseCase:
    return BatchAutoAssignUseCase(task_repo=SqlTaskRepository(session), assigner=assigner)


def get_team_workload_uc(
    session: AsyncSession = Depends(get_session),
) -> GetTeamWorkloadUseCase:
    return GetTeamWorkloadUseCase(
        member_repo=SqlTeamMemberRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_assignment_repo(session: AsyncSession = Depends(get_session)) -> SqlAssignmentRepository:
    return SqlAssignmentRepository(session)
