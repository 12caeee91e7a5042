"""Task service - Business logic for task operations."""

from __future__ import annotations

from gittaskr_cli.models import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    NotFoundError,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from gittaskr_cli.stores import RepositoryStore, TaskStore
from gittaskr_cli.utils.validators import (
    ensure_valid,
    validate_priority,
    validate_status,
    validate_title,
)


class TaskService:
    """Service for task business logic.

    This service encapsulates business rules and orchestrates task operations
    using the task and repository stores.
    """

    def __init__(self, task_store: TaskStore, repository_store: RepositoryStore):
        """Initialize the task service.

        Args:
            task_store: TaskStore implementation for data access
            repository_store: Used to check that a parent repository exists
        """
        self.repository = task_store
        self.repositories = repository_store

    async def list_tasks(
        self,
        repository_id: int,
        *,
        status: str | None = None,
    ) -> list[Task]:
        """List tasks of a repository, newest first.

        Args:
            repository_id: Owning repository
            status: Optional status filter

        Returns:
            List of Task objects (empty if none match)

        Raises:
            ValidationError: If status is given and not a valid status
        """
        if status is not None:
            ensure_valid(validate_status(status))
        filters = TaskFilters(repository_id=repository_id, status=status)
        return await self.repository.list_all(filters)

    async def get_task(self, task_id: int) -> Task | None:
        return await self.repository.get(task_id)

    async def require_task(self, task_id: int) -> Task:
        """Get a task or raise NotFoundError."""
        task = await self.repository.get(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task

    async def create_task(
        self,
        repository_id: int,
        title: str,
        *,
        description: str | None = None,
        priority: str = DEFAULT_PRIORITY,
        status: str = DEFAULT_STATUS,
    ) -> Task:
        """Create a new task under an existing repository.

        Raises:
            NotFoundError: The repository does not exist
            ValidationError: Empty title or out-of-domain priority/status
        """
        if await self.repositories.get(repository_id) is None:
            raise NotFoundError("repository", repository_id)

        ensure_valid(validate_title(title))
        ensure_valid(validate_priority(priority))
        ensure_valid(validate_status(status))

        task_data = TaskCreate(
            repository_id=repository_id,
            title=title,
            description=description or None,
            priority=priority,
            status=status,
        )
        return await self.repository.add(task_data)

    async def update_task_status(self, task_id: int, status: str) -> Task:
        """Change only the status of a task.

        Raises:
            ValidationError: status is not a valid status
            NotFoundError: The task does not exist
        """
        ensure_valid(validate_status(status))
        await self.require_task(task_id)
        return await self.repository.update(task_id, TaskUpdate(status=status))

    async def update_task(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        priority: str | None = None,
        status: str | None = None,
    ) -> Task:
        """Update any subset of a task's editable fields.

        Fields left as None are untouched. An empty description clears it.

        Returns:
            Updated Task object
        """
        current = await self.require_task(task_id)

        fields: dict[str, str | None] = {}
        if title is not None:
            ensure_valid(validate_title(title))
            fields["title"] = title
        if description is not None:
            fields["description"] = description or None
        if priority is not None:
            ensure_valid(validate_priority(priority))
            fields["priority"] = priority
        if status is not None:
            ensure_valid(validate_status(status))
            fields["status"] = status

        if not fields:
            return current
        return await self.repository.update(task_id, TaskUpdate(**fields))

    async def delete_task(self, task_id: int) -> None:
        """Delete a single task.

        Raises:
            NotFoundError: The task does not exist
        """
        await self.repository.delete(task_id)
