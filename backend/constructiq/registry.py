# backend/constructiq/registry.py
from dataclasses import dataclass
from typing import Dict, List, Type

from . import models, schemas
from .schemas.base import Record
from .utils.naming import to_camel


@dataclass(frozen=True)
class Collection:
    """One entity collection: its record type and its relational table"""
    name: str
    record: Type[Record]
    table: type
    project_scoped: bool = True
    newest_first: bool = False

    @property
    def storage_key(self) -> str:
        # Key suffix of the local blob, e.g. projectMembers
        return to_camel(self.name)


COLLECTIONS: Dict[str, Collection] = {
    c.name: c for c in [
        Collection("projects", schemas.Project, models.Project, project_scoped=False),
        Collection("project_members", schemas.ProjectMember, models.ProjectMember),
        Collection("dir_users", schemas.DirUser, models.DirUser),
        Collection("dir_companies", schemas.DirCompany, models.DirCompany),
        Collection("dist_groups", schemas.DistGroup, models.DistGroup),
        Collection("documents", schemas.Document, models.Document),
        Collection("tasks", schemas.Task, models.Task),
        Collection("rfis", schemas.Rfi, models.Rfi),
        Collection("submittals", schemas.Submittal, models.Submittal),
        Collection("specifications", schemas.Specification, models.Specification),
        Collection("activity_feed", schemas.ActivityEntry, models.ActivityEntry, newest_first=True),
        Collection("sequence_counters", schemas.SequenceCounter, models.SequenceCounter),
    ]
}


def get_collection(name: str) -> Collection:
    try:
        return COLLECTIONS[name]
    except KeyError:
        raise KeyError(f"Unknown collection: {name}") from None


def project_scoped() -> List[Collection]:
    return [c for c in COLLECTIONS.values() if c.project_scoped]
