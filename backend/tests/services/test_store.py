# tests/services/test_store.py
import pytest

from constructiq.errors import PersistenceFailure, ValidationFailure
from constructiq.persistence import LocalAdapter
from constructiq.services.store import EntityStore, RefreshPolicy


class FailingAdapter(LocalAdapter):
    """Local adapter whose medium rejects every write"""

    async def insert(self, collection, record, prepend=False):
        raise PersistenceFailure("storage is read-only")

    async def update(self, collection, record_id, fields):
        raise PersistenceFailure("storage is read-only")

    async def delete(self, collection, record_ids):
        raise PersistenceFailure("storage is read-only")


@pytest.mark.asyncio
async def test_add_assigns_id_and_created_at(store):
    project = await store.add("projects", {"name": "Harbor Tower"})

    assert project.id
    assert project.created_at is not None
    assert store.get("projects", project.id) == project
    assert store.all("projects") == [project]


@pytest.mark.asyncio
async def test_add_keeps_collection_order(store):
    first = await store.add("projects", {"name": "First"})
    second = await store.add("projects", {"name": "Second"})

    assert [p.id for p in store.all("projects")] == [first.id, second.id]


@pytest.mark.asyncio
async def test_add_accepts_snake_and_camel_keys(store):
    project = await store.add("projects", {"name": "Keys", "job_number": "J-1", "contractValue": 1500})

    assert project.job_number == "J-1"
    assert project.contract_value == 1500


@pytest.mark.asyncio
async def test_add_rejects_missing_required_field(store):
    with pytest.raises(ValidationFailure) as exc_info:
        await store.add("projects", {"name": "   "})

    assert "name" in exc_info.value.message
    assert exc_info.value.errors
    assert store.all("projects") == []


@pytest.mark.asyncio
async def test_update_merges_fields(store):
    project = await store.add("projects", {"name": "Harbor Tower", "city": "Boston"})

    updated = await store.update("projects", project.id, {"city": "Salem", "stage": "bidding"})

    assert updated.name == "Harbor Tower"
    assert updated.city == "Salem"
    assert updated.stage.value == "bidding"
    assert store.get("projects", project.id).city == "Salem"


@pytest.mark.asyncio
async def test_update_ignores_id_and_created_at(store):
    project = await store.add("projects", {"name": "Harbor Tower"})

    updated = await store.update("projects", project.id, {
        "id": "other-id",
        "createdAt": "2001-01-01T00:00:00+00:00",
        "name": "Renamed",
    })

    assert updated.id == project.id
    assert updated.created_at.year != 2001
    assert updated.name == "Renamed"


@pytest.mark.asyncio
async def test_update_unknown_id_is_noop(store):
    assert await store.update("projects", "missing", {"name": "Nope"}) is None
    assert store.all("projects") == []


@pytest.mark.asyncio
async def test_update_rejects_invalid_value(store):
    project = await store.add("projects", {"name": "Harbor Tower"})

    with pytest.raises(ValidationFailure):
        await store.update("projects", project.id, {"contractValue": -5})

    assert store.get("projects", project.id).contract_value is None


@pytest.mark.asyncio
async def test_delete_many_ignores_unknown_ids(store):
    a = await store.add("projects", {"name": "A"})
    b = await store.add("projects", {"name": "B"})

    removed = await store.delete_many("projects", [a.id, "missing"])

    assert [r.id for r in removed] == [a.id]
    assert [p.id for p in store.all("projects")] == [b.id]
    assert await store.delete("projects", "missing") is None


@pytest.mark.asyncio
async def test_where_filters_on_fields(store):
    await store.add("project_members", {"project_id": "p1", "user_id": "u1", "role": "administrator"})
    await store.add("project_members", {"project_id": "p1", "user_id": "u2"})
    await store.add("project_members", {"project_id": "p2", "user_id": "u1"})

    assert len(store.where("project_members", project_id="p1")) == 2
    assert [m.project_id for m in store.where("project_members", user_id="u1")] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_load_restores_collections(adapter, store):
    project = await store.add("projects", {"name": "Harbor Tower", "description": ""})

    reloaded = EntityStore(adapter)
    await reloaded.load()

    stored = reloaded.get("projects", project.id)
    assert stored.name == "Harbor Tower"
    assert stored.description == ""


@pytest.mark.asyncio
async def test_batch_rolls_back_memory_and_medium(adapter, store):
    kept = await store.add("projects", {"name": "Kept"})

    with pytest.raises(RuntimeError):
        async with store.batch():
            await store.add("projects", {"name": "Discarded"})
            await store.delete("projects", kept.id)
            raise RuntimeError("abort")

    assert [p.name for p in store.all("projects")] == ["Kept"]

    reloaded = EntityStore(adapter)
    await reloaded.load()
    assert [p.name for p in reloaded.all("projects")] == ["Kept"]


@pytest.mark.asyncio
async def test_nested_batch_joins_outer_batch(store):
    with pytest.raises(RuntimeError):
        async with store.batch():
            async with store.batch():
                await store.add("projects", {"name": "Inner"})
            raise RuntimeError("abort")

    assert store.all("projects") == []


@pytest.mark.asyncio
async def test_optimistic_add_generates_id_client_side(remote_adapter):
    store = EntityStore(remote_adapter, RefreshPolicy.OPTIMISTIC)
    await store.load()

    project = await store.add("projects", {"name": "Harbor Tower"})

    reloaded = EntityStore(remote_adapter)
    await reloaded.load()
    assert [p.id for p in reloaded.all("projects")] == [project.id]


@pytest.mark.asyncio
@pytest.mark.parametrize("policy", [RefreshPolicy.CONFIRM, RefreshPolicy.OPTIMISTIC])
async def test_failed_write_leaves_memory_unchanged(key_value_storage, policy):
    seeded = EntityStore(LocalAdapter(key_value_storage))
    project = await seeded.add("projects", {"name": "Harbor Tower"})

    store = EntityStore(FailingAdapter(key_value_storage), policy)
    await store.load()

    with pytest.raises(PersistenceFailure):
        await store.add("projects", {"name": "Rejected"})
    with pytest.raises(PersistenceFailure):
        await store.update("projects", project.id, {"name": "Rejected"})
    with pytest.raises(PersistenceFailure):
        await store.delete("projects", project.id)

    assert [p.name for p in store.all("projects")] == ["Harbor Tower"]
