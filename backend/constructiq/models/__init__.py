# backend/constructiq/models/__init__.py
from ..database import Base
from .project import Project, ProjectMember
from .directory import DirUser, DirCompany, DistGroup
from .document import Document
from .tracking import Task, Rfi, Submittal, Specification, SequenceCounter
from .activity import ActivityEntry

__all__ = [
    "Base",
    "Project",
    "ProjectMember",
    "DirUser",
    "DirCompany",
    "DistGroup",
    "Document",
    "Task",
    "Rfi",
    "Submittal",
    "Specification",
    "SequenceCounter",
    "ActivityEntry",
]
