# tests/persistence/test_local.py
import json

import pytest

from constructiq.errors import PersistenceFailure
from constructiq.persistence import FileKeyValueStorage, LocalAdapter


def test_storage_round_trips_and_deletes(key_value_storage):
    assert key_value_storage.get("missing") is None

    key_value_storage.set("constructiq_projects", "[]")
    assert key_value_storage.get("constructiq_projects") == "[]"

    key_value_storage.delete("constructiq_projects")
    assert key_value_storage.get("constructiq_projects") is None


def test_collection_keys(local_adapter):
    assert local_adapter.key_for("projects") == "constructiq_projects"
    assert local_adapter.key_for("project_members") == "constructiq_projectMembers"
    assert local_adapter.key_for("activity_feed") == "constructiq_activityFeed"
    with pytest.raises(KeyError):
        local_adapter.key_for("invoices")


@pytest.mark.asyncio
async def test_each_write_stores_the_whole_collection(local_adapter, key_value_storage):
    await local_adapter.insert("projects", {"id": "p1", "name": "One"})
    await local_adapter.insert("projects", {"id": "p2", "name": "Two"})
    await local_adapter.update("projects", "p1", {"name": "Uno"})

    stored = json.loads(key_value_storage.get("constructiq_projects"))
    assert stored == [{"id": "p1", "name": "Uno"}, {"id": "p2", "name": "Two"}]

    await local_adapter.delete("projects", ["p2", "missing"])
    assert json.loads(key_value_storage.get("constructiq_projects")) == [{"id": "p1", "name": "Uno"}]


@pytest.mark.asyncio
async def test_prepend_and_unknown_update(local_adapter):
    await local_adapter.insert("activity_feed", {"id": "a1"})
    await local_adapter.insert("activity_feed", {"id": "a2"}, prepend=True)

    assert [r["id"] for r in await local_adapter.load("activity_feed")] == ["a2", "a1"]
    assert await local_adapter.update("activity_feed", "missing", {"details": "x"}) is None


@pytest.mark.asyncio
async def test_batch_defers_writes_until_exit(local_adapter, key_value_storage):
    async with local_adapter.batch():
        await local_adapter.insert("projects", {"id": "p1", "name": "One"})
        await local_adapter.insert("tasks", {"id": "t1", "projectId": "p1"})
        assert key_value_storage.get("constructiq_projects") is None

    assert json.loads(key_value_storage.get("constructiq_tasks")) == [{"id": "t1", "projectId": "p1"}]
    assert key_value_storage.get(local_adapter.journal_key) is None


@pytest.mark.asyncio
async def test_failed_batch_discards_pending_writes(local_adapter, key_value_storage):
    await local_adapter.insert("projects", {"id": "p1", "name": "One"})

    with pytest.raises(RuntimeError):
        async with local_adapter.batch():
            await local_adapter.delete("projects", ["p1"])
            raise RuntimeError("abort")

    assert [r["id"] for r in await local_adapter.load("projects")] == ["p1"]


def test_interrupted_flush_is_replayed_on_startup(key_value_storage):
    key_value_storage.set("constructiq_projects", json.dumps([{"id": "p1", "name": "Stale"}]))
    key_value_storage.set("constructiq__journal", json.dumps({
        "constructiq_projects": json.dumps([{"id": "p1", "name": "Fresh"}]),
        "constructiq_tasks": json.dumps([{"id": "t1", "projectId": "p1"}]),
    }))

    adapter = LocalAdapter(key_value_storage, prefix="constructiq_")

    assert json.loads(key_value_storage.get("constructiq_projects")) == [{"id": "p1", "name": "Fresh"}]
    assert json.loads(key_value_storage.get("constructiq_tasks")) == [{"id": "t1", "projectId": "p1"}]
    assert key_value_storage.get(adapter.journal_key) is None


@pytest.mark.asyncio
async def test_write_errors_become_persistence_failures(tmp_path, monkeypatch):
    storage = FileKeyValueStorage(tmp_path / "kv")
    adapter = LocalAdapter(storage)

    def refuse(key, value):
        raise OSError("disk full")

    monkeypatch.setattr(storage, "set", refuse)

    with pytest.raises(PersistenceFailure):
        await adapter.insert("projects", {"id": "p1", "name": "One"})
    assert await adapter.load("projects") == []
