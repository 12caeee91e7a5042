"""Tests for SqliteRepositoryStore against a real SQLite file."""

from __future__ import annotations

from datetime import datetime

import pytest

from gittaskr_cli.adapters.sqlite.repository_store import parse_sort
from gittaskr_cli.models import (
    ConstraintViolation,
    NotFoundError,
    RepositoryCreate,
    RepositoryFilters,
    RepositoryUpdate,
    TaskCreate,
    ValidationError,
)


def _create(name: str, path: str, remote_url: str | None = None) -> RepositoryCreate:
    return RepositoryCreate(name=name, path=path, remote_url=remote_url)


# ---------------------------------------------------------------------------
# parse_sort
# ---------------------------------------------------------------------------


class TestParseSort:
    @pytest.mark.parametrize(
        "sort,expected",
        [
            ("created_at:desc", ("created_at", "desc")),
            ("name:asc", ("name", "asc")),
            ("name", ("name", "asc")),
            ("name:DESC", ("name", "desc")),
        ],
    )
    def test_valid(self, sort, expected):
        assert parse_sort(sort) == expected

    @pytest.mark.parametrize("sort", ["path:asc", "name:sideways", "id; DROP TABLE tasks", ""])
    def test_invalid(self, sort):
        with pytest.raises(ValidationError, match="Invalid sort"):
            parse_sort(sort)


# ---------------------------------------------------------------------------
# create / get
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_create_returns_stored_repository(self, repository_store):
        repository = await repository_store.create(
            _create("demo", "/tmp/demo", "https://github.com/u/demo.git")
        )
        assert repository.id == 1
        assert repository.name == "demo"
        assert repository.path == "/tmp/demo"
        assert repository.remote_url == "https://github.com/u/demo.git"
        assert repository.task_count == 0
        assert isinstance(repository.created_at, datetime)
        assert repository.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_ids_increase(self, repository_store):
        first = await repository_store.create(_create("a", "/tmp/a"))
        second = await repository_store.create(_create("b", "/tmp/b"))
        assert second.id > first.id

    @pytest.mark.asyncio
    async def test_duplicate_path_rejected(self, repository_store):
        await repository_store.create(_create("a", "/tmp/same"))
        with pytest.raises(ConstraintViolation, match="already exists in database: /tmp/same"):
            await repository_store.create(_create("b", "/tmp/same"))
        assert len(await repository_store.list_all(RepositoryFilters())) == 1

    @pytest.mark.asyncio
    async def test_duplicate_path_race_translated(self, repository_store, monkeypatch):
        await repository_store.create(_create("a", "/tmp/same"))

        async def _not_found(path):
            return None

        # Simulate another process inserting between the check and the insert
        monkeypatch.setattr(repository_store, "get_by_path", _not_found)
        with pytest.raises(ConstraintViolation, match="already exists in database"):
            await repository_store.create(_create("b", "/tmp/same"))

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository_store):
        assert await repository_store.get(42) is None

    @pytest.mark.asyncio
    async def test_get_by_path(self, repository_store):
        created = await repository_store.create(_create("a", "/tmp/a"))
        assert (await repository_store.get_by_path("/tmp/a")).id == created.id
        assert await repository_store.get_by_path("/tmp/other") is None


# ---------------------------------------------------------------------------
# list_all
# ---------------------------------------------------------------------------


class TestListAll:
    @pytest.mark.asyncio
    async def test_empty(self, repository_store):
        assert await repository_store.list_all(RepositoryFilters()) == []

    @pytest.mark.asyncio
    async def test_newest_first_by_default(self, repository_store):
        for name in ("a", "b", "c"):
            await repository_store.create(_create(name, f"/tmp/{name}"))
        names = [r.name for r in await repository_store.list_all(RepositoryFilters())]
        assert names == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_sort_by_name(self, repository_store):
        for name in ("beta", "alpha", "gamma"):
            await repository_store.create(_create(name, f"/tmp/{name}"))
        repositories = await repository_store.list_all(RepositoryFilters(sort="name:asc"))
        assert [r.name for r in repositories] == ["alpha", "beta", "gamma"]

    @pytest.mark.asyncio
    async def test_task_counts(self, repository_store, task_store):
        busy = await repository_store.create(_create("busy", "/tmp/busy"))
        await repository_store.create(_create("idle", "/tmp/idle"))
        for title in ("one", "two"):
            await task_store.add(TaskCreate(repository_id=busy.id, title=title))

        counts = {
            r.name: r.task_count for r in await repository_store.list_all(RepositoryFilters())
        }
        assert counts == {"busy": 2, "idle": 0}


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update(self, repository_store):
        created = await repository_store.create(
            _create("a", "/tmp/a", "git@github.com:u/a.git")
        )
        updated = await repository_store.update(created.id, RepositoryUpdate(name="renamed"))
        assert updated.name == "renamed"
        assert updated.path == "/tmp/a"
        assert updated.remote_url == "git@github.com:u/a.git"
        assert updated.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_clear_remote_url(self, repository_store):
        created = await repository_store.create(
            _create("a", "/tmp/a", "git@github.com:u/a.git")
        )
        updated = await repository_store.update(created.id, RepositoryUpdate(remote_url=None))
        assert updated.remote_url is None

    @pytest.mark.asyncio
    async def test_empty_update_is_noop(self, repository_store):
        created = await repository_store.create(_create("a", "/tmp/a"))
        assert await repository_store.update(created.id, RepositoryUpdate()) == created

    @pytest.mark.asyncio
    async def test_path_collision_rejected(self, repository_store):
        await repository_store.create(_create("a", "/tmp/a"))
        b = await repository_store.create(_create("b", "/tmp/b"))
        with pytest.raises(ConstraintViolation, match="/tmp/a"):
            await repository_store.update(b.id, RepositoryUpdate(path="/tmp/a"))
        assert (await repository_store.get(b.id)).path == "/tmp/b"

    @pytest.mark.asyncio
    async def test_keeping_own_path_allowed(self, repository_store):
        a = await repository_store.create(_create("a", "/tmp/a"))
        updated = await repository_store.update(a.id, RepositoryUpdate(path="/tmp/a", name="x"))
        assert updated.name == "x"

    @pytest.mark.asyncio
    async def test_missing_repository(self, repository_store):
        with pytest.raises(NotFoundError) as exc_info:
            await repository_store.update(99, RepositoryUpdate(name="x"))
        assert exc_info.value.entity == "repository"
        assert exc_info.value.entity_id == 99


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_tasks(self, repository_store, task_store, database):
        keep = await repository_store.create(_create("keep", "/tmp/keep"))
        drop = await repository_store.create(_create("drop", "/tmp/drop"))
        for title in ("one", "two", "three"):
            await task_store.add(TaskCreate(repository_id=drop.id, title=title))
        await task_store.add(TaskCreate(repository_id=keep.id, title="stays"))

        removed = await repository_store.delete(drop.id)

        assert removed == 3
        assert await repository_store.get(drop.id) is None
        orphans = database.query("SELECT * FROM tasks WHERE repository_id = ?", (drop.id,))
        assert orphans == []
        assert (await repository_store.get(keep.id)).task_count == 1

    @pytest.mark.asyncio
    async def test_delete_without_tasks(self, repository_store):
        created = await repository_store.create(_create("a", "/tmp/a"))
        assert await repository_store.delete(created.id) == 0

    @pytest.mark.asyncio
    async def test_delete_missing(self, repository_store):
        with pytest.raises(NotFoundError, match="Repository not found: 7"):
            await repository_store.delete(7)

    @pytest.mark.asyncio
    async def test_delete_is_atomic(self, repository_store, task_store, database, monkeypatch):
        created = await repository_store.create(_create("a", "/tmp/a"))
        await task_store.add(TaskCreate(repository_id=created.id, title="t"))

        original_execute = database.execute

        def failing_execute(statement, params=()):
            if statement.startswith("DELETE FROM repositories"):
                raise RuntimeError("disk yanked")
            return original_execute(statement, params)

        with monkeypatch.context() as m:
            m.setattr(database, "execute", failing_execute)
            with pytest.raises(RuntimeError):
                await repository_store.delete(created.id)

        assert await repository_store.get(created.id) is not None
        assert len(database.query("SELECT * FROM tasks")) == 1

    @pytest.mark.asyncio
    async def test_path_reusable_after_delete(self, repository_store):
        created = await repository_store.create(_create("a", "/tmp/a"))
        await repository_store.delete(created.id)
        again = await repository_store.create(_create("a", "/tmp/a"))
        assert again.id != created.id
