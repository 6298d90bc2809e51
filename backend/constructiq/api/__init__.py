# backend/constructiq/api/__init__.py
from .projects import router as projects_router
from .directory import router as directory_router
from .documents import router as documents_router
from .tasks import router as tasks_router
from .rfis import router as rfis_router
from .submittals import router as submittals_router
from .specifications import router as specifications_router
from .activity import router as activity_router

__all__ = [
    "projects_router", "directory_router", "documents_router", "tasks_router",
    "rfis_router", "submittals_router", "specifications_router", "activity_router",
]
