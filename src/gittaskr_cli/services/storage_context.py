"""Scoped access to the database and the services built on it.

Each command opens one StorageContext, does its work and leaves the block;
the database handle is closed on every exit path, including
KeyboardInterrupt and SystemExit.

Usage:
    with open_storage_context() as storage:
        await storage.repository_service.list_repositories()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from gittaskr_cli.adapters.sqlite import Database, SqliteRepositoryStore, SqliteTaskStore
from gittaskr_cli.config import get_config_manager
from gittaskr_cli.services.repository_service import RepositoryService
from gittaskr_cli.services.task_service import TaskService


@dataclass
class StorageContext:
    """Open database plus the services wired to it."""

    database: Database
    repository_service: RepositoryService
    task_service: TaskService


@contextmanager
def open_storage_context(db_path: str | Path | None = None) -> Iterator[StorageContext]:
    """Open the database, yield wired services, and always close it.

    Args:
        db_path: Database file. If None, resolved through the config manager.

    Raises:
        StorageError: If the database cannot be opened
        SchemaError: If the schema cannot be created
    """
    if db_path is None:
        db_path = get_config_manager().database_path()

    with Database(db_path) as database:
        repository_store = SqliteRepositoryStore(database)
        task_store = SqliteTaskStore(database)
        yield StorageContext(
            database=database,
            repository_service=RepositoryService(repository_store),
            task_service=TaskService(task_store, repository_store),
        )
