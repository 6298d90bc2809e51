# backend/constructiq/services/store.py
import enum
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from ..errors import PersistenceFailure, ValidationFailure
from ..persistence.base import PersistenceAdapter
from ..registry import COLLECTIONS, get_collection
from ..schemas.base import Record
from ..utils.logging import service_logger
from ..utils.naming import to_camel

FieldBag = Union[Dict[str, Any], BaseModel]

IMMUTABLE_FIELDS = {"id", "createdAt"}


class RefreshPolicy(str, enum.Enum):
    """When the in-memory collections follow a mutation"""
    CONFIRM = "confirm"  # after the adapter accepted it, from the returned record
    OPTIMISTIC = "optimistic"  # before the adapter call, reverted if it fails


def _as_fields(data: FieldBag) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", exclude_unset=True, by_alias=True)
    return {to_camel(key): value for key, value in data.items()}


def validation_failure(error: ValidationError, entity: str) -> ValidationFailure:
    fields = sorted({".".join(str(part) for part in err["loc"]) for err in error.errors()})
    return ValidationFailure(
        f"Invalid {entity}: {', '.join(fields) or 'record'}",
        errors=error.errors(include_url=False, include_context=False),
    )


class EntityStore:
    """In-memory mirror of every entity collection.

    The add/update/delete coroutines are the only sanctioned mutation path.
    Reads are served from memory and return records in collection order.
    """

    def __init__(self, adapter: PersistenceAdapter, policy: RefreshPolicy = RefreshPolicy.CONFIRM):
        self.adapter = adapter
        self.policy = RefreshPolicy(policy)
        self._collections: Dict[str, List[Record]] = {name: [] for name in COLLECTIONS}
        self._batch_depth = 0

    async def load(self) -> None:
        """Refresh every collection from the adapter"""
        for name, entry in COLLECTIONS.items():
            rows = await self.adapter.load(name)
            self._collections[name] = [entry.record.model_validate(row) for row in rows]
        service_logger.info("Entity store loaded", extra={
            "counts": {name: len(records) for name, records in self._collections.items()}
        })

    # Reads

    def all(self, collection: str) -> List[Record]:
        get_collection(collection)
        return list(self._collections[collection])

    def get(self, collection: str, record_id: Optional[str]) -> Optional[Record]:
        if record_id is None:
            return None
        return next((r for r in self._collections[collection] if r.id == record_id), None)

    def where(self, collection: str, **criteria: Any) -> List[Record]:
        return [
            record for record in self._collections[collection]
            if all(getattr(record, key) == value for key, value in criteria.items())
        ]

    # Mutations

    def _new_record(self, collection: str, data: FieldBag) -> Dict[str, Any]:
        fields = _as_fields(data)
        fields.setdefault("createdAt", datetime.now(timezone.utc).isoformat())
        if "id" not in fields and (not self.adapter.assigns_ids or self.policy is RefreshPolicy.OPTIMISTIC):
            fields["id"] = str(uuid4())
        return fields

    def _validate(self, collection: str, fields: Dict[str, Any]) -> Record:
        entry = get_collection(collection)
        try:
            return entry.record.model_validate(fields)
        except ValidationError as e:
            raise validation_failure(e, entry.record.__name__) from e

    def _place(self, collection: str, record: Record, prepend: bool) -> None:
        if prepend:
            self._collections[collection].insert(0, record)
        else:
            self._collections[collection].append(record)

    def _replace(self, collection: str, record: Record) -> None:
        records = self._collections[collection]
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                return

    def _drop(self, collection: str, record_ids: Iterable[str]) -> List[Record]:
        doomed = set(record_ids)
        removed = [r for r in self._collections[collection] if r.id in doomed]
        self._collections[collection] = [r for r in self._collections[collection] if r.id not in doomed]
        return removed

    async def add(self, collection: str, data: FieldBag, prepend: bool = False) -> Record:
        """Create a record; id and createdAt are assigned when absent"""
        fields = self._new_record(collection, data)

        if self.policy is RefreshPolicy.OPTIMISTIC:
            record = self._validate(collection, fields)
            self._place(collection, record, prepend)
            try:
                await self.adapter.insert(collection, record.model_dump(mode="json", by_alias=True), prepend=prepend)
            except PersistenceFailure:
                self._drop(collection, [record.id])
                raise
        else:
            # The medium assigns the id, so validate with a blank one and strip it again
            draft = self._validate(collection, {"id": "", **fields})
            payload = draft.model_dump(mode="json", by_alias=True)
            if "id" not in fields:
                payload.pop("id")
            stored = await self.adapter.insert(collection, payload, prepend=prepend)
            record = self._validate(collection, stored)
            self._place(collection, record, prepend)

        service_logger.debug("Record added", extra={"collection": collection, "record_id": record.id})
        return record

    async def update(self, collection: str, record_id: str, data: FieldBag) -> Optional[Record]:
        """Merge fields into a record; returns None when the id is unknown"""
        current = self.get(collection, record_id)
        if current is None:
            service_logger.warning("Update of unknown record ignored", extra={
                "collection": collection, "record_id": record_id
            })
            return None

        changes = {k: v for k, v in _as_fields(data).items() if k not in IMMUTABLE_FIELDS}
        merged = self._validate(collection, {**current.model_dump(mode="json", by_alias=True), **changes})
        changes = {key: value for key, value in merged.model_dump(mode="json", by_alias=True).items()
                   if key in changes}

        if self.policy is RefreshPolicy.OPTIMISTIC:
            self._replace(collection, merged)
            try:
                stored = await self.adapter.update(collection, record_id, changes)
            except PersistenceFailure:
                self._replace(collection, current)
                raise
            if stored is None:
                self._drop(collection, [record_id])
                return None
            return merged

        stored = await self.adapter.update(collection, record_id, changes)
        if stored is None:
            # Gone from the medium: the mirror was stale
            self._drop(collection, [record_id])
            return None
        record = self._validate(collection, stored)
        self._replace(collection, record)
        return record

    async def delete(self, collection: str, record_id: str) -> Optional[Record]:
        removed = await self.delete_many(collection, [record_id])
        return removed[0] if removed else None

    async def delete_many(self, collection: str, record_ids: Iterable[str]) -> List[Record]:
        """Remove records by id; unknown ids are ignored"""
        ids = set(record_ids)
        present = [r for r in self._collections[collection] if r.id in ids]
        if not present:
            return []

        if self.policy is RefreshPolicy.OPTIMISTIC:
            snapshot = list(self._collections[collection])
            removed = self._drop(collection, ids)
            try:
                await self.adapter.delete(collection, [r.id for r in removed])
            except PersistenceFailure:
                self._collections[collection] = snapshot
                raise
            return removed

        await self.adapter.delete(collection, [r.id for r in present])
        return self._drop(collection, ids)

    @asynccontextmanager
    async def batch(self) -> AsyncIterator["EntityStore"]:
        """All-or-nothing group of mutations, in the medium and in memory"""
        if self._batch_depth:
            self._batch_depth += 1
            try:
                yield self
            finally:
                self._batch_depth -= 1
            return

        snapshot = {name: list(records) for name, records in self._collections.items()}
        self._batch_depth = 1
        try:
            async with self.adapter.batch():
                yield self
        except Exception:
            self._collections = snapshot
            service_logger.warning("Batch rolled back")
            raise
        finally:
            self._batch_depth = 0
