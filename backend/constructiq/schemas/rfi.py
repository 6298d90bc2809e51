# backend/constructiq/schemas/rfi.py
import enum
from datetime import datetime
from typing import List, Optional

from pydantic import PositiveInt

from .base import BaseSchema, OptionalDate, ProjectRecord, RequiredText
from .document import FilePayload


class RfiStatus(str, enum.Enum):
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"


class RfiResponse(BaseSchema):
    id: str
    author_id: Optional[str] = None
    text: str
    created_at: datetime


class RfiResponseCreate(BaseSchema):
    text: RequiredText


class RfiBase(BaseSchema):
    subject: RequiredText
    question: str = ""
    status: RfiStatus = RfiStatus.OPEN
    due_date: OptionalDate = None
    rfi_manager: str = ""  # DirUser id
    received_from: str = ""  # DirUser id
    assignees: List[str] = []
    distribution_list: List[str] = []
    responsible_contractor: str = ""  # DirCompany id
    specification: str = ""  # Specification id
    drawing_number: str = ""
    attachments: List[FilePayload] = []


class RfiCreate(RfiBase):
    project_id: str
    rfi_number: Optional[PositiveInt] = None  # assigned when omitted


class RfiUpdate(BaseSchema):
    subject: Optional[RequiredText] = None
    question: Optional[str] = None
    status: Optional[RfiStatus] = None
    due_date: OptionalDate = None
    rfi_manager: Optional[str] = None
    received_from: Optional[str] = None
    assignees: Optional[List[str]] = None
    distribution_list: Optional[List[str]] = None
    responsible_contractor: Optional[str] = None
    specification: Optional[str] = None
    drawing_number: Optional[str] = None
    attachments: Optional[List[FilePayload]] = None


class Rfi(RfiBase, ProjectRecord):
    rfi_number: int
    responses: List[RfiResponse] = []
