"""Core domain models.

Repository and Task are the typed records returned by the storage layer.
The *Create / *Update / *Filters models carry already-validated input from
the service layer down to the stores.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, Field

TaskStatus = Literal["pending", "in-progress", "completed"]
TaskPriority = Literal["low", "medium", "high"]

VALID_STATUSES: tuple[str, ...] = get_args(TaskStatus)
VALID_PRIORITIES: tuple[str, ...] = get_args(TaskPriority)

DEFAULT_STATUS: TaskStatus = "pending"
DEFAULT_PRIORITY: TaskPriority = "medium"


class Repository(BaseModel):
    """A tracked local repository.

    Attributes:
        id: Generated integer identifier
        name: Display name
        path: Absolute local directory path, unique across the store
        remote_url: Optional remote URL (https or ssh form)
        created_at: Creation timestamp, never modified
        task_count: Number of tasks referencing this repository (derived)
    """

    id: int
    name: str
    path: str
    remote_url: str | None = None
    created_at: datetime
    task_count: int = 0


class RepositoryCreate(BaseModel):
    """Model for creating a new repository."""

    name: str
    path: str
    remote_url: str | None = None


class RepositoryUpdate(BaseModel):
    """Model for updating a repository.

    Only fields that were explicitly set are written, so ``remote_url=None``
    clears the URL while an unset field keeps its stored value.
    """

    name: str | None = None
    path: str | None = None
    remote_url: str | None = None


class RepositoryFilters(BaseModel):
    """Listing options for repositories.

    Attributes:
        sort: "<field>:<direction>" where field is created_at or name
    """

    sort: str = "created_at:desc"


class Task(BaseModel):
    """A task attached to a repository.

    Attributes:
        id: Generated integer identifier
        title: Non-empty title
        description: Optional free text
        status: pending, in-progress or completed
        priority: low, medium or high
        created_at: Creation timestamp, never modified
        repository_id: Owning repository
        repository_name: Owning repository's name (read-only join)
    """

    id: int
    title: str
    description: str | None = None
    status: TaskStatus = DEFAULT_STATUS
    priority: TaskPriority = DEFAULT_PRIORITY
    created_at: datetime
    repository_id: int
    repository_name: str | None = None


class TaskCreate(BaseModel):
    """Model for creating a new task."""

    repository_id: int
    title: str = Field(min_length=1)
    description: str | None = None
    status: TaskStatus = DEFAULT_STATUS
    priority: TaskPriority = DEFAULT_PRIORITY


class TaskUpdate(BaseModel):
    """Model for updating a task. Unset fields are left untouched."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None


class TaskFilters(BaseModel):
    """Filters for listing tasks of one repository."""

    repository_id: int
    status: TaskStatus | None = None
