"""gittaskr domain models.

Pydantic models for the two persisted entities plus the error taxonomy
shared by every layer.
"""

from .core import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    VALID_PRIORITIES,
    VALID_STATUSES,
    Repository,
    RepositoryCreate,
    RepositoryFilters,
    RepositoryUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskPriority,
    TaskStatus,
    TaskUpdate,
)
from .exceptions import (
    ConstraintViolation,
    GittaskrError,
    NotFoundError,
    SchemaError,
    StorageError,
    ValidationError,
)

__all__ = [
    # Repository models
    "Repository",
    "RepositoryCreate",
    "RepositoryUpdate",
    "RepositoryFilters",
    # Task models
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilters",
    "TaskStatus",
    "TaskPriority",
    "VALID_STATUSES",
    "VALID_PRIORITIES",
    "DEFAULT_STATUS",
    "DEFAULT_PRIORITY",
    # Errors
    "GittaskrError",
    "ValidationError",
    "ConstraintViolation",
    "NotFoundError",
    "StorageError",
    "SchemaError",
]
