"""Database schema definitions for the local SQLite store.

The repositories table must be created before tasks because tasks carries
the foreign key.
"""

from __future__ import annotations

import sqlite3

from gittaskr_cli.models import SchemaError, VALID_PRIORITIES, VALID_STATUSES

# Stored in PRAGMA user_version
SCHEMA_VERSION = 1


def _sql_in_list(values: tuple[str, ...]) -> str:
    return ", ".join(f"'{value}'" for value in values)


# Repositories table
CREATE_REPOSITORIES_TABLE = """
CREATE TABLE IF NOT EXISTS repositories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL CHECK (length(name) > 0),
    path TEXT NOT NULL UNIQUE,
    remote_url TEXT,
    created_at DATETIME NOT NULL
)
"""

# Tasks table
CREATE_TASKS_TABLE = f"""
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL CHECK (length(title) > 0),
    description TEXT,
    status TEXT NOT NULL DEFAULT 'pending'
        CHECK (status IN ({_sql_in_list(VALID_STATUSES)})),
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ({_sql_in_list(VALID_PRIORITIES)})),
    created_at DATETIME NOT NULL,
    repository_id INTEGER NOT NULL,
    FOREIGN KEY (repository_id) REFERENCES repositories(id) ON DELETE CASCADE
)
"""

CREATE_REPOSITORY_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_repositories_created ON repositories(created_at)",
]

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_repository ON tasks(repository_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(repository_id, status)",
]

# All table creation statements in dependency order
ALL_TABLES = [
    CREATE_REPOSITORIES_TABLE,
    CREATE_TASKS_TABLE,
]

ALL_INDEXES = CREATE_REPOSITORY_INDEXES + CREATE_TASK_INDEXES


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Create all tables and indexes if they are missing.

    Safe to call on every startup.

    Args:
        connection: sqlite3.Connection object

    Raises:
        SchemaError: If any statement fails. The partial schema is rolled back.
    """
    try:
        cursor = connection.cursor()
        if not connection.in_transaction:
            cursor.execute("BEGIN")

        for create_statement in ALL_TABLES:
            cursor.execute(create_statement)

        for index_statement in ALL_INDEXES:
            cursor.execute(index_statement)

        cursor.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        connection.commit()
    except sqlite3.Error as e:
        connection.rollback()
        raise SchemaError(f"Failed to initialize database schema: {e}") from e


def get_schema_version(connection: sqlite3.Connection) -> int:
    """Get current schema version from the database.

    Returns:
        Schema version number, or 0 if not initialized
    """
    cursor = connection.execute("PRAGMA user_version")
    result = cursor.fetchone()
    return result[0] if result is not None else 0
