# backend/constructiq/schemas/__init__.py
from .base import BaseSchema, Record, ProjectRecord
from .project import (
    Project, ProjectCreate, ProjectUpdate, ProjectDetail, ProjectStage, ProjectMember, ProjectMemberCreate,
)
from .directory import (
    DirUser, DirUserCreate, DirUserUpdate,
    DirCompany, DirCompanyCreate, DirCompanyUpdate,
    DistGroup, DistGroupCreate, DistGroupUpdate,
)
from .document import (
    Document, DocumentCreate, DocumentUpdate, DocumentMove, DocumentCopy,
    DocumentListing, DocumentType, FilePayload,
)
from .task import Task, TaskCreate, TaskUpdate, TaskStatus, TaskCategory
from .rfi import Rfi, RfiCreate, RfiUpdate, RfiStatus, RfiResponse, RfiResponseCreate
from .submittal import Submittal, SubmittalCreate, SubmittalUpdate, SubmittalStatus
from .specification import Specification, SpecificationCreate, SpecificationUpdate
from .activity import ActivityEntry, ActivityType, SequenceCounter

__all__ = [
    "BaseSchema", "Record", "ProjectRecord",
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectDetail", "ProjectStage", "ProjectMember", "ProjectMemberCreate",
    "DirUser", "DirUserCreate", "DirUserUpdate",
    "DirCompany", "DirCompanyCreate", "DirCompanyUpdate",
    "DistGroup", "DistGroupCreate", "DistGroupUpdate",
    "Document", "DocumentCreate", "DocumentUpdate", "DocumentMove", "DocumentCopy",
    "DocumentListing", "DocumentType", "FilePayload",
    "Task", "TaskCreate", "TaskUpdate", "TaskStatus", "TaskCategory",
    "Rfi", "RfiCreate", "RfiUpdate", "RfiStatus", "RfiResponse", "RfiResponseCreate",
    "Submittal", "SubmittalCreate", "SubmittalUpdate", "SubmittalStatus",
    "Specification", "SpecificationCreate", "SpecificationUpdate",
    "ActivityEntry", "ActivityType", "SequenceCounter",
]
