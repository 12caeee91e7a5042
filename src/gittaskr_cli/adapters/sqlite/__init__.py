"""SQLite adapter module - Local database storage implementation."""

from gittaskr_cli.adapters.sqlite.connection import Database, ExecuteResult, default_db_path
from gittaskr_cli.adapters.sqlite.repository_store import SqliteRepositoryStore
from gittaskr_cli.adapters.sqlite.task_store import SqliteTaskStore

__all__ = [
    "Database",
    "ExecuteResult",
    "default_db_path",
    "SqliteRepositoryStore",
    "SqliteTaskStore",
]
