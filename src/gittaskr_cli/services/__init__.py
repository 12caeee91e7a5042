"""Domain services for gittaskr."""

from .repository_service import RepositoryService
from .task_service import TaskService

__all__ = [
    "RepositoryService",
    "TaskService",
]
