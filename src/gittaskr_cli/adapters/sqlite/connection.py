"""Database connection management for the local SQLite store.

`Database` is an explicitly owned handle: the CLI opens exactly one per
invocation, passes it to the stores and closes it on every exit path.
It enforces foreign keys, runs in WAL mode and translates sqlite3 errors
into the gittaskr error taxonomy.
"""

from __future__ import annotations

import atexit
import os
import sqlite3
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from gittaskr_cli.adapters.sqlite.schema import get_schema_version, initialize_schema
from gittaskr_cli.models import ConstraintViolation, SchemaError, StorageError
from gittaskr_cli.utils.logger import get_logger

DEFAULT_DB_FILE = "gittaskr.db"

Params = Sequence[Any] | dict[str, Any]


def default_db_path() -> Path:
    """Location of the database when nothing else is configured."""
    return Path(user_data_dir("gittaskr-cli")) / DEFAULT_DB_FILE


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a single mutating statement."""

    rowcount: int
    lastrowid: int | None


class Database:
    """Owned connection to the local SQLite store.

    Provides:
    - Foreign key constraint enforcement
    - WAL mode and a busy timeout for concurrent CLI invocations
    - Automatic directory creation
    - Proper file permissions (owner read/write only)
    - Scoped transactions with rollback on failure
    - Release on exit, including interpreter shutdown

    Usage:
        with Database(path) as db:
            with db.transaction():
                db.execute("DELETE FROM tasks WHERE repository_id = ?", (1,))
    """

    def __init__(self, db_path: str | Path | None = None, timeout: float = 30.0):
        """Initialize the handle without connecting.

        Args:
            db_path: Path to database file. If None, uses default location.
            timeout: Seconds to wait for locks held by another process
        """
        self.db_path = Path(db_path) if db_path is not None else default_db_path()
        self.timeout = timeout
        self._connection: sqlite3.Connection | None = None
        self._in_transaction = False

    def __enter__(self) -> Database:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> sqlite3.Connection:
        """Underlying sqlite3 connection. Raises if the handle is closed."""
        if self._connection is None:
            raise StorageError("Database is not open")
        return self._connection

    def open(self) -> Database:
        """Connect, configure and ensure the schema exists.

        Returns:
            self, so it can be used as ``db = Database(path).open()``

        Raises:
            StorageError: If the file cannot be created or opened
            SchemaError: If the schema cannot be created
        """
        if self._connection is not None:
            return self

        logger = get_logger()
        is_new_database = not self.db_path.exists()

        connection = None
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # Autocommit mode; transactions are begun explicitly
            connection = sqlite3.connect(
                str(self.db_path),
                timeout=self.timeout,
                isolation_level=None,
            )
            connection.row_factory = sqlite3.Row
            connection.execute("PRAGMA foreign_keys = ON")
            connection.execute("PRAGMA journal_mode = WAL")
        except (OSError, sqlite3.Error) as e:
            if connection is not None:
                connection.close()
            logger.error("cannot open database %s: %s", self.db_path, e)
            raise StorageError(f"Cannot open database at {self.db_path}: {e}") from e

        if is_new_database:
            os.chmod(self.db_path, 0o600)

        self._connection = connection
        atexit.register(self.close)

        try:
            self.ensure_schema()
        except SchemaError:
            logger.critical("schema initialization failed for %s", self.db_path)
            self.close()
            raise

        logger.debug("database opened: %s", self.db_path)
        return self

    def ensure_schema(self) -> None:
        """Create the tables if they are missing (idempotent)."""
        initialize_schema(self.connection)

    def get_schema_version(self) -> int:
        return get_schema_version(self.connection)

    def close(self) -> None:
        """Close the connection. Rolls back any open transaction. Idempotent."""
        connection = self._connection
        if connection is None:
            return

        logger = get_logger()
        try:
            if connection.in_transaction:
                logger.warning("rolling back open transaction on close")
                connection.rollback()
            connection.close()
        except sqlite3.Error as e:
            logger.warning("error while closing database: %s", e)
        finally:
            self._connection = None
            self._in_transaction = False
            atexit.unregister(self.close)

        logger.debug("database closed: %s", self.db_path)

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except sqlite3.IntegrityError as e:
            get_logger().info("constraint violation: %s", e)
            raise ConstraintViolation(str(e)) from e
        except sqlite3.Error as e:
            get_logger().error("storage error: %s", e)
            raise StorageError(str(e)) from e

    def execute(self, statement: str, params: Params = ()) -> ExecuteResult:
        """Run a single mutating statement.

        Outside of `transaction()` the statement is committed immediately.

        Returns:
            ExecuteResult with affected row count and generated row id

        Raises:
            ConstraintViolation: On UNIQUE, CHECK, NOT NULL or FOREIGN KEY failure
            StorageError: On any other database failure
        """
        with self._translate_errors():
            cursor = self.connection.execute(statement, params)
        return ExecuteResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)

    def query(self, statement: str, params: Params = ()) -> list[sqlite3.Row]:
        """Run a read. Returns an empty list when nothing matches."""
        with self._translate_errors():
            return self.connection.execute(statement, params).fetchall()

    def query_one(self, statement: str, params: Params = ()) -> sqlite3.Row | None:
        """Run a read and return the first row, or None."""
        with self._translate_errors():
            return self.connection.execute(statement, params).fetchone()

    @contextmanager
    def transaction(self) -> Iterator[Database]:
        """Run the enclosed statements as one atomic unit.

        Commits on normal exit. On any exception the transaction is rolled
        back before the exception propagates.

        Raises:
            StorageError: If a transaction is already in progress
        """
        if self._in_transaction:
            raise StorageError("A transaction is already in progress")

        connection = self.connection
        with self._translate_errors():
            # Take the write lock up front so no other process sees a half-applied change
            connection.execute("BEGIN IMMEDIATE")
        self._in_transaction = True

        try:
            yield self
            with self._translate_errors():
                connection.commit()
        except BaseException:
            if connection.in_transaction:
                connection.rollback()
                get_logger().warning("transaction rolled back")
            raise
        finally:
            self._in_transaction = False
