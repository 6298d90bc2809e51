# backend/constructiq/services/activity.py
from typing import Iterable, List, Optional

from ..schemas.activity import ActivityEntry, ActivityType
from ..utils.logging import service_logger
from .store import EntityStore

DEFAULT_FEED_LIMIT = 500


class ActivityJournal:
    """Newest-first feed of human-readable events, capped globally"""

    def __init__(self, store: EntityStore, limit: int = DEFAULT_FEED_LIMIT):
        self.store = store
        self.limit = limit

    async def record(
            self,
            project_id: str,
            type: ActivityType,
            action: str,
            details: str,
            user_id: Optional[str] = None,
    ) -> ActivityEntry:
        async with self.store.batch():
            entry = await self.store.add("activity_feed", {
                "project_id": project_id,
                "type": ActivityType(type).value,
                "action": action,
                "details": details,
                "user_id": user_id,
            }, prepend=True)

            overflow = self.store.all("activity_feed")[self.limit:]
            if overflow:
                await self.store.delete_many("activity_feed", [e.id for e in overflow])
                service_logger.debug("Activity feed trimmed", extra={"dropped": len(overflow)})
        return entry

    def feed(
            self,
            project_ids: Iterable[str],
            only: Optional[Iterable[str]] = None,
            limit: Optional[int] = None,
    ) -> List[ActivityEntry]:
        """Entries of the accessible projects, optionally narrowed to a subset"""
        visible = set(project_ids)
        if only is not None:
            visible &= set(only)
        entries = [e for e in self.store.all("activity_feed") if e.project_id in visible]
        return entries[:limit] if limit is not None else entries
