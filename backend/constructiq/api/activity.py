# backend/constructiq/api/activity.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_current_user_id, get_workspace
from ..schemas.activity import ActivityEntry as ActivityEntrySchema
from ..services.workspace import Workspace

router = APIRouter(prefix="/api/activity", tags=["activity"])


@router.get("", response_model=List[ActivityEntrySchema])
async def list_activity(
        project_id: Optional[List[str]] = Query(None),
        limit: Optional[int] = Query(None, ge=1),
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    """Newest-first feed over the current user's projects"""
    accessible = [p.id for p in workspace.get_user_projects(user_id)]
    return workspace.activity.feed(accessible, only=project_id, limit=limit)
