from .task_definition import TaskDefinition, Track
from .user_task import UserTask, TaskStatus

__all__ = [
    "TaskDefinition",
    "Track",
    "UserTask",
    "TaskStatus",
]
