"""Store abstraction layer for gittaskr.

This module defines the abstract base classes (interfaces) for persistence,
following the ports & adapters pattern. Services depend only on these
contracts; the SQLite implementations live in `gittaskr_cli.adapters.sqlite`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from gittaskr_cli.models import (
    Repository,
    RepositoryCreate,
    RepositoryFilters,
    RepositoryUpdate,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)


class RepositoryStore(ABC):
    """Abstract base class for repository persistence operations."""

    @abstractmethod
    async def list_all(self, filters: RepositoryFilters) -> list[Repository]:
        """List repositories, each annotated with its task count.

        Args:
            filters: RepositoryFilters specifying sort order

        Returns:
            List of Repository objects (empty when there are none)
        """
        raise NotImplementedError(
            "RepositoryStore.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, repository_id: int) -> Repository | None:
        """Get a repository by ID, or None if it does not exist."""
        raise NotImplementedError("RepositoryStore.get() must be implemented by adapter")

    @abstractmethod
    async def get_by_path(self, path: str) -> Repository | None:
        """Get the repository registered at ``path``, or None."""
        raise NotImplementedError(
            "RepositoryStore.get_by_path() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, repository_data: RepositoryCreate) -> Repository:
        """Create a new repository.

        Args:
            repository_data: Validated RepositoryCreate

        Returns:
            Created Repository with generated ID and timestamp

        Raises:
            ConstraintViolation: If the path is already registered
        """
        raise NotImplementedError(
            "RepositoryStore.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(
        self, repository_id: int, updates: RepositoryUpdate
    ) -> Repository:
        """Apply the explicitly set fields of ``updates``.

        Raises:
            NotFoundError: If the repository does not exist
            ConstraintViolation: If the new path is already registered
        """
        raise NotImplementedError(
            "RepositoryStore.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, repository_id: int) -> int:
        """Delete a repository and all of its tasks atomically.

        Returns:
            Number of tasks removed along with the repository

        Raises:
            NotFoundError: If the repository does not exist
        """
        raise NotImplementedError(
            "RepositoryStore.delete() must be implemented by adapter"
        )


class TaskStore(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks of one repository, newest first."""
        raise NotImplementedError("TaskStore.list_all() must be implemented by adapter")

    @abstractmethod
    async def get(self, task_id: int) -> Task | None:
        """Get a task by ID (with its repository name), or None."""
        raise NotImplementedError("TaskStore.get() must be implemented by adapter")

    @abstractmethod
    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task.

        Raises:
            ConstraintViolation: If the referenced repository does not exist
        """
        raise NotImplementedError("TaskStore.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task_id: int, updates: TaskUpdate) -> Task:
        """Apply the explicitly set fields of ``updates``.

        Raises:
            NotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskStore.update() must be implemented by adapter")

    @abstractmethod
    async def delete(self, task_id: int) -> None:
        """Delete a task.

        Raises:
            NotFoundError: If the task does not exist
        """
        raise NotImplementedError("TaskStore.delete() must be implemented by adapter")
