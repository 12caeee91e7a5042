"""SQLite implementation of TaskStore."""

from __future__ import annotations

from typing import Any

from gittaskr_cli.adapters.sqlite.connection import Database
from gittaskr_cli.adapters.sqlite.utils import build_update_clause, now_iso, row_to_dict
from gittaskr_cli.models import NotFoundError, Task, TaskCreate, TaskFilters, TaskUpdate
from gittaskr_cli.stores import TaskStore
from gittaskr_cli.utils.logger import get_logger

_SELECT_WITH_REPOSITORY = """
    SELECT t.id, t.title, t.description, t.status, t.priority, t.created_at,
           t.repository_id, r.name AS repository_name
    FROM tasks t
    JOIN repositories r ON t.repository_id = r.id
"""


class SqliteTaskStore(TaskStore):
    """SQLite implementation of the task store."""

    def __init__(self, database: Database):
        """Initialize the store.

        Args:
            database: Open Database handle owned by the caller
        """
        self.database = database

    async def list_all(self, filters: TaskFilters) -> list[Task]:
        """List tasks of a repository, newest first."""
        query = _SELECT_WITH_REPOSITORY + " WHERE t.repository_id = ?"
        params: list[Any] = [filters.repository_id]

        if filters.status is not None:
            query += " AND t.status = ?"
            params.append(filters.status)

        query += " ORDER BY t.created_at DESC, t.id DESC"

        rows = self.database.query(query, params)
        return [Task(**row_to_dict(row)) for row in rows]

    async def get(self, task_id: int) -> Task | None:
        """Get a specific task by ID."""
        row = self.database.query_one(
            _SELECT_WITH_REPOSITORY + " WHERE t.id = ?", (task_id,)
        )
        if row is None:
            return None
        return Task(**row_to_dict(row))

    async def add(self, task_data: TaskCreate) -> Task:
        """Create a new task."""
        data = task_data.model_dump()

        result = self.database.execute(
            """INSERT INTO tasks (
                title, description, status, priority, created_at, repository_id
            ) VALUES (?, ?, ?, ?, ?, ?)""",
            (
                data["title"],
                data.get("description"),
                data["status"],
                data["priority"],
                now_iso(),
                data["repository_id"],
            ),
        )

        get_logger().info(
            "task created: id=%s repository_id=%s",
            result.lastrowid,
            data["repository_id"],
        )
        return await self._require(result.lastrowid)

    async def update(self, task_id: int, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        current = await self._require(task_id)

        update_dict = updates.model_dump(exclude_unset=True)
        if not update_dict:
            return current

        set_clause, params = build_update_clause(update_dict)
        params.append(task_id)

        self.database.execute(f"UPDATE tasks SET {set_clause} WHERE id = ?", params)

        get_logger().info("task updated: id=%s fields=%s", task_id, sorted(update_dict))
        return await self._require(task_id)

    async def delete(self, task_id: int) -> None:
        """Delete a task."""
        result = self.database.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        if result.rowcount == 0:
            raise NotFoundError("task", task_id)

        get_logger().info("task deleted: id=%s", task_id)

    async def _require(self, task_id: int) -> Task:
        task = await self.get(task_id)
        if task is None:
            raise NotFoundError("task", task_id)
        return task
