"""SQLite implementation of RepositoryStore."""

from __future__ import annotations

from gittaskr_cli.adapters.sqlite.connection import Database
from gittaskr_cli.adapters.sqlite.utils import build_update_clause, now_iso, row_to_dict
from gittaskr_cli.models import (
    ConstraintViolation,
    NotFoundError,
    Repository,
    RepositoryCreate,
    RepositoryFilters,
    RepositoryUpdate,
    ValidationError,
)
from gittaskr_cli.stores import RepositoryStore
from gittaskr_cli.utils.logger import get_logger

SORT_FIELDS = ("created_at", "name")
SORT_DIRECTIONS = ("asc", "desc")

_SELECT_WITH_COUNT = """
    SELECT r.id, r.name, r.path, r.remote_url, r.created_at,
           COUNT(t.id) AS task_count
    FROM repositories r
    LEFT JOIN tasks t ON t.repository_id = r.id
"""


def parse_sort(sort: str) -> tuple[str, str]:
    """Split "<field>:<direction>" into a whitelisted (field, direction) pair.

    Raises:
        ValidationError: If either part is not recognised
    """
    field, _, direction = sort.partition(":")
    direction = (direction or "asc").lower()
    if field not in SORT_FIELDS or direction not in SORT_DIRECTIONS:
        raise ValidationError(
            f"Invalid sort '{sort}'. Use one of: "
            + ", ".join(f"{f}:{d}" for f in SORT_FIELDS for d in SORT_DIRECTIONS)
        )
    return field, direction


class SqliteRepositoryStore(RepositoryStore):
    """SQLite implementation of the repository store."""

    def __init__(self, database: Database):
        """Initialize the store.

        Args:
            database: Open Database handle owned by the caller
        """
        self.database = database

    async def list_all(self, filters: RepositoryFilters) -> list[Repository]:
        """List repositories with their task counts."""
        field, direction = parse_sort(filters.sort)
        # Both parts come from the whitelist above
        query = (
            _SELECT_WITH_COUNT
            + f" GROUP BY r.id ORDER BY r.{field} {direction.upper()}, r.id {direction.upper()}"
        )
        rows = self.database.query(query)
        return [Repository(**row_to_dict(row)) for row in rows]

    async def get(self, repository_id: int) -> Repository | None:
        """Get a specific repository by ID."""
        row = self.database.query_one(
            _SELECT_WITH_COUNT + " WHERE r.id = ? GROUP BY r.id",
            (repository_id,),
        )
        if row is None:
            return None
        return Repository(**row_to_dict(row))

    async def get_by_path(self, path: str) -> Repository | None:
        """Get the repository registered at a path."""
        row = self.database.query_one(
            _SELECT_WITH_COUNT + " WHERE r.path = ? GROUP BY r.id",
            (path,),
        )
        if row is None:
            return None
        return Repository(**row_to_dict(row))

    async def create(self, repository_data: RepositoryCreate) -> Repository:
        """Create a new repository."""
        data = repository_data.model_dump()

        if await self.get_by_path(data["path"]) is not None:
            raise ConstraintViolation(
                f"Repository path already exists in database: {data['path']}"
            )

        try:
            result = self.database.execute(
                """INSERT INTO repositories (name, path, remote_url, created_at)
                   VALUES (?, ?, ?, ?)""",
                (data["name"], data["path"], data.get("remote_url"), now_iso()),
            )
        except ConstraintViolation as e:
            # Another process registered the same path since the check above
            raise ConstraintViolation(
                f"Repository path already exists in database: {data['path']}"
            ) from e

        get_logger().info("repository created: id=%s path=%s", result.lastrowid, data["path"])
        return await self._require(result.lastrowid)

    async def update(
        self, repository_id: int, updates: RepositoryUpdate
    ) -> Repository:
        """Update an existing repository."""
        current = await self._require(repository_id)

        update_dict = updates.model_dump(exclude_unset=True)
        if not update_dict:
            return current

        new_path = update_dict.get("path")
        if new_path is not None and new_path != current.path:
            existing = await self.get_by_path(new_path)
            if existing is not None:
                raise ConstraintViolation(
                    f"Repository path already exists in database: {new_path}"
                )

        set_clause, params = build_update_clause(update_dict)
        params.append(repository_id)

        try:
            self.database.execute(
                f"UPDATE repositories SET {set_clause} WHERE id = ?", params
            )
        except ConstraintViolation as e:
            raise ConstraintViolation(
                f"Repository path already exists in database: {new_path}"
            ) from e

        get_logger().info(
            "repository updated: id=%s fields=%s", repository_id, sorted(update_dict)
        )
        return await self._require(repository_id)

    async def delete(self, repository_id: int) -> int:
        """Delete a repository and its tasks in one transaction."""
        with self.database.transaction():
            row = self.database.query_one(
                "SELECT id FROM repositories WHERE id = ?", (repository_id,)
            )
            if row is None:
                raise NotFoundError("repository", repository_id)

            removed_tasks = self.database.execute(
                "DELETE FROM tasks WHERE repository_id = ?", (repository_id,)
            ).rowcount
            self.database.execute(
                "DELETE FROM repositories WHERE id = ?", (repository_id,)
            )

        get_logger().info(
            "repository deleted: id=%s tasks_removed=%s", repository_id, removed_tasks
        )
        return removed_tasks

    async def _require(self, repository_id: int) -> Repository:
        repository = await self.get(repository_id)
        if repository is None:
            raise NotFoundError("repository", repository_id)
        return repository
