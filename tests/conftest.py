"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real log directory,
config file and database.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from gittaskr_cli import config as config_module
from gittaskr_cli.adapters.sqlite import Database, SqliteRepositoryStore, SqliteTaskStore
from gittaskr_cli.config import ConfigManager
from gittaskr_cli.services import RepositoryService, TaskService
from gittaskr_cli.utils import logger as logger_module


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Send log files to tmp_path and rebuild the logger singleton per test."""
    log_dir = tmp_path / "logs"
    app_logger = logging.getLogger(logger_module._APP_NAME)
    logger_module._logger = None
    app_logger.handlers.clear()
    with patch("gittaskr_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir
    for handler in app_logger.handlers:
        handler.close()
    app_logger.handlers.clear()
    logger_module._logger = None


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Fresh ConfigManager in tmp_path; GITTASKR_DB points at a tmp database."""
    monkeypatch.setenv(config_module.DB_ENV_VAR, str(tmp_path / "env.db"))
    manager = ConfigManager(config_dir=tmp_path / "config")
    monkeypatch.setattr(config_module, "_config_manager", manager)
    return manager


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "gittaskr.db"


@pytest.fixture
def database(db_path):
    """Open Database on a real SQLite file."""
    db = Database(db_path).open()
    yield db
    db.close()


@pytest.fixture
def repository_store(database):
    return SqliteRepositoryStore(database)


@pytest.fixture
def task_store(database):
    return SqliteTaskStore(database)


@pytest.fixture
def repository_service(repository_store):
    return RepositoryService(repository_store)


@pytest.fixture
def task_service(task_store, repository_store):
    return TaskService(task_store, repository_store)


@pytest.fixture
def repo_dir(tmp_path):
    """An existing directory to register as a repository."""
    path = tmp_path / "work" / "project"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def make_dir(tmp_path):
    """Factory for additional existing directories."""

    def _make(name: str):
        path = tmp_path / "work" / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    return _make
