# backend/constructiq/services/__init__.py
from .store import EntityStore, RefreshPolicy
from .sequence import SequenceAssigner
from .activity import ActivityJournal
from .cascade import CascadeManager
from .documents import DocumentTree
from .workspace import Workspace
from .cleanup import cleanup_service

__all__ = [
    "EntityStore", "RefreshPolicy", "SequenceAssigner", "ActivityJournal",
    "CascadeManager", "DocumentTree", "Workspace", "cleanup_service",
]
