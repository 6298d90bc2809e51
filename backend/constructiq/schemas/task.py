# backend/constructiq/schemas/task.py
import enum
from typing import List, Optional

from pydantic import PositiveInt

from .base import BaseSchema, OptionalDate, ProjectRecord, RequiredText
from .document import FilePayload


class TaskStatus(str, enum.Enum):
    OPEN = "open"
    IN_PROGRESS = "in progress"
    CLOSED = "closed"


class TaskCategory(str, enum.Enum):
    ADMINISTRATIVE = "administrative"
    CLOSEOUT = "closeout"
    CONTRACT = "contract"
    DESIGN = "design"
    MISCELLANEOUS = "miscellaneous"
    CONSTRUCTION = "construction"


class TaskBase(BaseSchema):
    title: RequiredText
    status: TaskStatus = TaskStatus.OPEN
    category: TaskCategory = TaskCategory.MISCELLANEOUS
    description: str = ""
    due_date: OptionalDate = None
    assignees: List[str] = []
    distribution_list: List[str] = []
    attachments: List[FilePayload] = []


class TaskCreate(TaskBase):
    project_id: str
    task_number: Optional[PositiveInt] = None  # assigned when omitted


class TaskUpdate(BaseSchema):
    title: Optional[RequiredText] = None
    status: Optional[TaskStatus] = None
    category: Optional[TaskCategory] = None
    description: Optional[str] = None
    due_date: OptionalDate = None
    assignees: Optional[List[str]] = None
    distribution_list: Optional[List[str]] = None
    attachments: Optional[List[FilePayload]] = None


class Task(TaskBase, ProjectRecord):
    task_number: int
