"""Store interfaces for gittaskr.

Abstract base classes defining the persistence contracts (the "ports").
The SQLite implementations (the "adapters") are in gittaskr_cli.adapters.sqlite.
"""

from .store import RepositoryStore, TaskStore

__all__ = [
    "RepositoryStore",
    "TaskStore",
]
