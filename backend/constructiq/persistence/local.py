# backend/constructiq/persistence/local.py
import json
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional, Set

from ..errors import PersistenceFailure
from ..registry import get_collection
from ..utils.logging import db_logger
from .base import PersistenceAdapter, RecordData


class FileKeyValueStorage:
    """String blobs addressed by key, one file per key"""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(value, encoding="utf-8")
        os.replace(tmp_path, path)

    def delete(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()


class LocalAdapter(PersistenceAdapter):
    """Whole-collection JSON blobs in a key-value storage; ids come from the store"""

    assigns_ids = False

    def __init__(self, storage: FileKeyValueStorage, prefix: str = "constructiq_"):
        self.storage = storage
        self.prefix = prefix
        self._cache: Dict[str, List[RecordData]] = {}
        self._batching = False
        self._dirty: Set[str] = set()
        self.recover()

    @property
    def journal_key(self) -> str:
        return f"{self.prefix}_journal"

    def key_for(self, collection: str) -> str:
        return f"{self.prefix}{get_collection(collection).storage_key}"

    def recover(self) -> None:
        """Finish a batch flush that was interrupted after its journal was written"""
        raw = self.storage.get(self.journal_key)
        if raw is None:
            return
        try:
            pending = json.loads(raw)
        except json.JSONDecodeError:
            db_logger.error("Discarding unreadable write journal", extra={"key": self.journal_key})
            self.storage.delete(self.journal_key)
            return

        db_logger.warning("Replaying interrupted batch", extra={"keys": sorted(pending)})
        for key, blob in pending.items():
            self.storage.set(key, blob)
        self.storage.delete(self.journal_key)

    def _records(self, collection: str) -> List[RecordData]:
        if collection not in self._cache:
            key = self.key_for(collection)
            try:
                raw = self.storage.get(key)
            except OSError as e:
                raise PersistenceFailure(f"Failed to read {key}: {e}") from e
            try:
                self._cache[collection] = json.loads(raw) if raw else []
            except json.JSONDecodeError:
                db_logger.warning("Unreadable collection blob, starting empty", extra={"key": key})
                self._cache[collection] = []
        return self._cache[collection]

    def _save(self, collection: str) -> None:
        if self._batching:
            self._dirty.add(collection)
            return
        key = self.key_for(collection)
        try:
            self.storage.set(key, json.dumps(self._cache[collection]))
        except OSError as e:
            self._cache.pop(collection, None)
            raise PersistenceFailure(f"Failed to write {key}: {e}") from e

    def _flush(self, collections: Set[str]) -> None:
        blobs = {self.key_for(name): json.dumps(self._cache[name]) for name in collections}
        try:
            self.storage.set(self.journal_key, json.dumps(blobs))
            for key, blob in blobs.items():
                self.storage.set(key, blob)
            self.storage.delete(self.journal_key)
        except OSError as e:
            # The journal stays behind and is replayed by recover()
            raise PersistenceFailure(f"Failed to flush batch: {e}") from e

    async def load(self, collection: str) -> List[RecordData]:
        return [dict(record) for record in self._records(collection)]

    async def insert(self, collection: str, record: RecordData, prepend: bool = False) -> RecordData:
        records = self._records(collection)
        if prepend:
            records.insert(0, dict(record))
        else:
            records.append(dict(record))
        self._save(collection)
        return dict(record)

    async def update(self, collection: str, record_id: str, fields: RecordData) -> Optional[RecordData]:
        records = self._records(collection)
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                records[index] = {**record, **fields}
                self._save(collection)
                return dict(records[index])
        return None

    async def delete(self, collection: str, record_ids: List[str]) -> None:
        doomed = set(record_ids)
        records = self._records(collection)
        remaining = [record for record in records if record.get("id") not in doomed]
        if len(remaining) != len(records):
            self._cache[collection] = remaining
            self._save(collection)

    @asynccontextmanager
    async def batch(self) -> AsyncIterator[None]:
        if self._batching:
            yield
            return

        self._batching = True
        self._dirty = set()
        try:
            yield
        except Exception:
            # Unflushed changes are dropped; the blobs still hold the last good state
            for name in self._dirty:
                self._cache.pop(name, None)
            raise
        else:
            if self._dirty:
                try:
                    self._flush(self._dirty)
                except PersistenceFailure:
                    for name in self._dirty:
                        self._cache.pop(name, None)
                    raise
        finally:
            self._batching = False
            self._dirty = set()
