# backend/constructiq/persistence/base.py
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

RecordData = Dict[str, Any]


class PersistenceAdapter(ABC):
    """Durable medium behind the entity store.

    Records cross this boundary as JSON-ready dicts keyed by their logical
    camelCase field names. Every method raises PersistenceFailure when the
    medium rejects the change; nothing is retried.
    """

    #: True when the medium generates identifiers on insert
    assigns_ids: bool = False

    @abstractmethod
    async def load(self, collection: str) -> List[RecordData]:
        """Return every stored record of a collection in display order"""

    @abstractmethod
    async def insert(self, collection: str, record: RecordData, prepend: bool = False) -> RecordData:
        """Store a new record and return the authoritative copy"""

    @abstractmethod
    async def update(self, collection: str, record_id: str, fields: RecordData) -> Optional[RecordData]:
        """Merge fields into a record; None when the id is not stored"""

    @abstractmethod
    async def delete(self, collection: str, record_ids: List[str]) -> None:
        """Remove records; unknown ids are ignored"""

    @asynccontextmanager
    async def batch(self) -> AsyncIterator[None]:
        """Group mutations so they are applied all-or-nothing"""
        yield

    async def close(self) -> None:
        pass
