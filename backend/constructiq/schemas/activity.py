# backend/constructiq/schemas/activity.py
import enum
from typing import Optional

from .base import ProjectRecord


class ActivityType(str, enum.Enum):
    PROJECT = "project"
    TASK = "task"
    RFI = "rfi"
    SUBMITTAL = "submittal"


class ActivityEntry(ProjectRecord):
    type: ActivityType
    action: str
    details: str = ""
    user_id: Optional[str] = None


class SequenceCounter(ProjectRecord):
    kind: str  # numbered collection name: tasks, rfis, submittals
    last_number: int = 0
