"""Repository service - Business logic for repository operations."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from gittaskr_cli.models import (
    NotFoundError,
    Repository,
    RepositoryCreate,
    RepositoryFilters,
    RepositoryUpdate,
)
from gittaskr_cli.stores import RepositoryStore
from gittaskr_cli.utils.filesystem import resolve_directory
from gittaskr_cli.utils.validators import (
    ensure_valid,
    validate_name,
    validate_remote_url,
)


class RepositoryService:
    """Service for repository business logic.

    Validates input, resolves paths through the filesystem collaborator and
    delegates persistence to the repository store.
    """

    def __init__(
        self,
        repository_store: RepositoryStore,
        directory_resolver: Callable[[str], Path] = resolve_directory,
    ):
        """Initialize the repository service.

        Args:
            repository_store: RepositoryStore implementation for data access
            directory_resolver: Turns a user path into an existing absolute
                directory, raising ValidationError otherwise
        """
        self.repository = repository_store
        self.directory_resolver = directory_resolver

    async def list_repositories(self, *, sort: str = "created_at:desc") -> list[Repository]:
        """List repositories with their task counts.

        Args:
            sort: "<field>:<direction>", field is created_at or name

        Returns:
            List of Repository objects, newest first by default
        """
        return await self.repository.list_all(RepositoryFilters(sort=sort))

    async def get_repository(self, repository_id: int) -> Repository | None:
        return await self.repository.get(repository_id)

    async def require_repository(self, repository_id: int) -> Repository:
        """Get a repository or raise NotFoundError."""
        repository = await self.repository.get(repository_id)
        if repository is None:
            raise NotFoundError("repository", repository_id)
        return repository

    async def create_repository(
        self,
        name: str,
        path: str,
        remote_url: str | None = None,
    ) -> Repository:
        """Register a new repository.

        Args:
            name: Repository name (required)
            path: Local directory; stored resolved and absolute
            remote_url: Optional remote URL, checked only when non-empty

        Returns:
            Created Repository object

        Raises:
            ValidationError: Empty name, missing directory or bad URL shape
            ConstraintViolation: The path is already registered
        """
        ensure_valid(validate_name(name))
        resolved_path = self.directory_resolver(path)
        ensure_valid(validate_remote_url(remote_url))

        repository_data = RepositoryCreate(
            name=name,
            path=str(resolved_path),
            remote_url=remote_url or None,
        )
        return await self.repository.create(repository_data)

    async def update_repository(
        self,
        repository_id: int,
        *,
        name: str | None = None,
        path: str | None = None,
        remote_url: str | None = None,
    ) -> Repository:
        """Update an existing repository.

        Fields left as None keep their stored value. An empty ``remote_url``
        clears it.

        Returns:
            Updated Repository object
        """
        current = await self.require_repository(repository_id)

        fields: dict[str, str | None] = {}
        if name is not None:
            ensure_valid(validate_name(name))
            fields["name"] = name
        if path is not None:
            resolved_path = str(self.directory_resolver(path))
            if resolved_path != current.path:
                fields["path"] = resolved_path
        if remote_url is not None:
            ensure_valid(validate_remote_url(remote_url))
            fields["remote_url"] = remote_url or None

        if not fields:
            return current
        return await self.repository.update(repository_id, RepositoryUpdate(**fields))

    async def delete_repository(self, repository_id: int) -> int:
        """Delete a repository together with all of its tasks.

        Returns:
            Number of tasks removed with the repository
        """
        return await self.repository.delete(repository_id)
