"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    SENIOR = "senior"
    EMPLOYEE = "employee"
    DATA_COLLECTOR = "data_collector"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(str, Enum):
    NOT_STARTED = "not_started"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    PENDING = "pending"
    REVIEW = "review"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    REJECTED = "rejected"


class PendingReason(str, Enum):
    DATA_MISSING = "data_missing"
    REVIEW = "review"
    CLARITY_NEEDED = "clarity_needed"


class NotificationType(str, Enum):
    TASK_ASSIGNED = "task_assigned"
    TASK_REASSIGNED = "task_reassigned"
