# backend/constructiq/services/sequence.py
import asyncio
from collections import defaultdict
from typing import Dict, Tuple

from .store import EntityStore

# Numbered collections and the field carrying their display number
NUMBER_FIELDS: Dict[str, str] = {
    "tasks": "task_number",
    "rfis": "rfi_number",
    "submittals": "submittal_number",
}


class SequenceAssigner:
    """Per-project display numbers for tasks, RFIs and submittals.

    next = 1 + max(live numbers, stored high-water mark). The mark is kept in
    the sequence_counters collection so a number freed by deleting the
    highest record is not handed out again. Numbering is serialized per
    (project, kind) within this process only.
    """

    def __init__(self, store: EntityStore):
        self.store = store
        self._locks: Dict[Tuple[str, str], asyncio.Lock] = defaultdict(asyncio.Lock)

    @staticmethod
    def _field(kind: str) -> str:
        try:
            return NUMBER_FIELDS[kind]
        except KeyError:
            raise ValueError(f"{kind} records are not numbered") from None

    def lock(self, project_id: str, kind: str) -> asyncio.Lock:
        self._field(kind)
        return self._locks[(project_id, kind)]

    def forget(self, project_id: str) -> None:
        """Drop the idle locks of a deleted project"""
        for key in [k for k, lock in self._locks.items() if k[0] == project_id and not lock.locked()]:
            del self._locks[key]

    def _counter(self, project_id: str, kind: str):
        counters = self.store.where("sequence_counters", project_id=project_id, kind=kind)
        return counters[0] if counters else None

    def peek(self, project_id: str, kind: str) -> int:
        """The number the next record of this kind would receive"""
        field = self._field(kind)
        live = [getattr(r, field) or 0 for r in self.store.where(kind, project_id=project_id)]
        counter = self._counter(project_id, kind)
        high_water = counter.last_number if counter else 0
        return 1 + max(live + [high_water], default=0)

    async def reserve(self, project_id: str, kind: str, number: int) -> None:
        """Raise the high-water mark to cover a number that has been used"""
        counter = self._counter(project_id, kind)
        if counter is None:
            await self.store.add("sequence_counters", {
                "project_id": project_id, "kind": kind, "last_number": number,
            })
        elif number > counter.last_number:
            await self.store.update("sequence_counters", counter.id, {"last_number": number})
