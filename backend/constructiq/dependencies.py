# backend/constructiq/dependencies.py
from typing import Optional

from fastapi import Depends, Header, HTTPException

from .config import Settings, settings
from .persistence import build_adapter
from .services.store import EntityStore, RefreshPolicy
from .services.workspace import ADMINISTRATOR, Workspace
from .utils.logging import api_logger

_workspace: Optional[Workspace] = None


async def create_workspace(config: Optional[Settings] = None) -> Workspace:
    """Build the configured store and load every collection into memory"""
    config = config or settings
    store = EntityStore(build_adapter(config), RefreshPolicy(config.REFRESH_POLICY))
    workspace = Workspace(store, activity_limit=config.ACTIVITY_FEED_LIMIT)
    await workspace.load()
    return workspace


def set_workspace(workspace: Optional[Workspace]) -> None:
    global _workspace
    _workspace = workspace


def get_workspace() -> Workspace:
    if _workspace is None:
        raise RuntimeError("Workspace has not been initialised")
    return _workspace


def get_current_user_id(x_user_id: str = Header(..., min_length=1)) -> str:
    """The authentication layer in front of the API supplies the user id"""
    return x_user_id


def require_project_admin(
        project_id: str,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
) -> str:
    if workspace.get_project(project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")
    if workspace.get_project_role(project_id, user_id) != ADMINISTRATOR:
        api_logger.warning("Administrator role required", extra={
            "project_id": project_id,
            "user_id": user_id,
        })
        raise HTTPException(status_code=403, detail="Administrator role required")
    return user_id
