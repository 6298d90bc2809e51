# tests/services/test_activity.py
import pytest

from constructiq.errors import PersistenceFailure
from constructiq.persistence import LocalAdapter
from constructiq.schemas import ActivityType
from constructiq.services.activity import DEFAULT_FEED_LIMIT, ActivityJournal
from constructiq.services.store import EntityStore


@pytest.mark.asyncio
async def test_record_prepends(store):
    journal = ActivityJournal(store)

    await journal.record("p1", ActivityType.TASK, "created", "Task #1: Mobilize", "user-1")
    await journal.record("p1", ActivityType.TASK, "updated", "Task #1: Mobilize updated", "user-1")

    assert [e.details for e in journal.feed(["p1"])] == ["Task #1: Mobilize updated", "Task #1: Mobilize"]


@pytest.mark.asyncio
async def test_cap_evicts_oldest(adapter, store):
    journal = ActivityJournal(store, limit=3)

    for i in range(4):
        await journal.record("p1", ActivityType.RFI, "created", f"RFI #{i + 1}: Question", None)

    feed = journal.feed(["p1"])
    assert [e.details for e in feed] == ["RFI #4: Question", "RFI #3: Question", "RFI #2: Question"]
    assert len(await adapter.load("activity_feed")) == 3


@pytest.mark.asyncio
async def test_feed_never_exceeds_default_cap(local_adapter):
    store = EntityStore(local_adapter)
    journal = ActivityJournal(store)
    for i in range(DEFAULT_FEED_LIMIT):
        await journal.record("p1", ActivityType.TASK, "created", f"Task #{i + 1}: Item", None)
    oldest = store.all("activity_feed")[-1]
    assert len(store.all("activity_feed")) == 500

    await journal.record("p1", ActivityType.TASK, "created", "Task #501: Item", None)

    entries = store.all("activity_feed")
    assert len(entries) == 500
    assert entries[0].details == "Task #501: Item"
    assert oldest.id not in {e.id for e in entries}


@pytest.mark.asyncio
async def test_feed_filters_by_project(store):
    journal = ActivityJournal(store)
    await journal.record("p1", ActivityType.PROJECT, "created", 'Project "One" created')
    await journal.record("p2", ActivityType.PROJECT, "created", 'Project "Two" created')
    await journal.record("p3", ActivityType.PROJECT, "created", 'Project "Three" created')

    assert [e.project_id for e in journal.feed(["p1", "p2"])] == ["p2", "p1"]
    assert [e.project_id for e in journal.feed(["p1", "p2"], only=["p1", "p3"])] == ["p1"]
    assert [e.project_id for e in journal.feed(["p1", "p2", "p3"], limit=1)] == ["p3"]


class TrimRejectingAdapter(LocalAdapter):
    """Local adapter that accepts inserts but cannot delete"""

    async def delete(self, collection, record_ids):
        raise PersistenceFailure("storage is read-only")


@pytest.mark.asyncio
async def test_failed_trim_discards_the_new_entry(key_value_storage):
    store = EntityStore(TrimRejectingAdapter(key_value_storage))
    journal = ActivityJournal(store, limit=1)
    first = await journal.record("p1", ActivityType.TASK, "created", "Task #1: Mobilize")

    with pytest.raises(PersistenceFailure):
        await journal.record("p1", ActivityType.TASK, "created", "Task #2: Order steel")

    assert [e.id for e in store.all("activity_feed")] == [first.id]

    reloaded = EntityStore(LocalAdapter(key_value_storage))
    await reloaded.load()
    assert [e.id for e in reloaded.all("activity_feed")] == [first.id]


@pytest.mark.asyncio
async def test_empty_subset_narrows_to_nothing(store):
    journal = ActivityJournal(store)
    await journal.record("p1", ActivityType.PROJECT, "created", 'Project "One" created')

    assert journal.feed(["p1"], only=[]) == []
    assert len(journal.feed(["p1"], only=None)) == 1
