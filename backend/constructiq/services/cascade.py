# backend/constructiq/services/cascade.py
from typing import Dict, List

from ..registry import project_scoped
from ..schemas.base import Record
from ..utils.logging import service_logger
from .store import EntityStore


class CascadeManager:
    """Project deletion: the only cascading delete in the model"""

    def __init__(self, store: EntityStore):
        self.store = store

    async def delete_project(self, project_id: str) -> Dict[str, List[Record]]:
        """Remove a project and every record referencing it, in one batch.

        Dependents are removed even when the project record itself is already
        gone. Returns the removed records keyed by collection.
        """
        service_logger.info("Cascading project delete", extra={"project_id": project_id})
        removed: Dict[str, List[Record]] = {}

        async with self.store.batch():
            # Dependents before the project row: project_id is a foreign key
            for collection in project_scoped():
                ids = [r.id for r in self.store.where(collection.name, project_id=project_id)]
                if ids:
                    removed[collection.name] = await self.store.delete_many(collection.name, ids)

            project = await self.store.delete("projects", project_id)
            if project is not None:
                removed["projects"] = [project]

        service_logger.info("Project deleted", extra={
            "project_id": project_id,
            "removed": {name: len(records) for name, records in removed.items()},
        })
        return removed
