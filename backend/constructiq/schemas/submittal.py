# backend/constructiq/schemas/submittal.py
import enum
from typing import Optional

from pydantic import PositiveInt

from .base import BaseSchema, OptionalDate, ProjectRecord, RequiredText


class SubmittalStatus(str, enum.Enum):
    DRAFT = "draft"
    OPEN = "open"
    CLOSED = "closed"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISE_AND_RESUBMIT = "revise and resubmit"


class SubmittalBase(BaseSchema):
    title: RequiredText
    status: SubmittalStatus = SubmittalStatus.OPEN
    type: str = ""
    spec_section: str = ""
    due_date: OptionalDate = None
    assignee: str = ""  # DirUser id
    description: str = ""


class SubmittalCreate(SubmittalBase):
    project_id: str
    submittal_number: Optional[PositiveInt] = None  # assigned when omitted


class SubmittalUpdate(BaseSchema):
    title: Optional[RequiredText] = None
    status: Optional[SubmittalStatus] = None
    type: Optional[str] = None
    spec_section: Optional[str] = None
    due_date: OptionalDate = None
    assignee: Optional[str] = None
    description: Optional[str] = None


class Submittal(SubmittalBase, ProjectRecord):
    submittal_number: int
