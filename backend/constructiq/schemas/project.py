# backend/constructiq/schemas/project.py
import enum
from typing import Optional

from .base import BaseSchema, OptionalAmount, OptionalDate, ProjectRecord, Record, RequiredText


class ProjectStage(str, enum.Enum):
    BIDDING = "bidding"
    PRE_CONSTRUCTION = "pre-construction"
    COURSE_OF_CONSTRUCTION = "course-of-construction"
    POST_CONSTRUCTION = "post-construction"
    WARRANTY = "warranty"


class ProjectBase(BaseSchema):
    name: RequiredText
    job_number: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    county: str = ""
    stage: ProjectStage = ProjectStage.PRE_CONSTRUCTION
    sector: str = ""
    contract_value: OptionalAmount = None
    description: str = ""

    # Milestones
    start_date: OptionalDate = None
    actual_start_date: OptionalDate = None
    completion_date: OptionalDate = None
    projected_finish_date: OptionalDate = None
    warranty_start_date: OptionalDate = None
    warranty_end_date: OptionalDate = None


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseSchema):
    name: Optional[RequiredText] = None
    job_number: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    county: Optional[str] = None
    stage: Optional[ProjectStage] = None
    sector: Optional[str] = None
    contract_value: OptionalAmount = None
    description: Optional[str] = None
    start_date: OptionalDate = None
    actual_start_date: OptionalDate = None
    completion_date: OptionalDate = None
    projected_finish_date: OptionalDate = None
    warranty_start_date: OptionalDate = None
    warranty_end_date: OptionalDate = None


class Project(ProjectBase, Record):
    pass


class ProjectMemberCreate(BaseSchema):
    user_id: RequiredText
    role: RequiredText = "member"


class ProjectMember(ProjectRecord):
    user_id: str
    role: str = "member"


class ProjectDetail(Project):
    role: Optional[str] = None
    member_count: int = 0
    document_count: int = 0
    open_rfi_count: int = 0
    open_submittal_count: int = 0
    open_task_count: int = 0
