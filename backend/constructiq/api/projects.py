# backend/constructiq/api/projects.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_current_user_id, get_workspace, require_project_admin
from ..schemas.project import (
    Project as ProjectSchema,
    ProjectCreate,
    ProjectDetail,
    ProjectMember as ProjectMemberSchema,
    ProjectMemberCreate,
    ProjectUpdate,
)
from ..services.cleanup import cleanup_service
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=List[ProjectSchema])
async def list_projects(
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    """List the projects the current user is a member of"""
    projects = workspace.get_user_projects(user_id)
    api_logger.info(f"Found {len(projects)} projects", extra={"user_id": user_id})
    return projects


@router.post("", response_model=ProjectSchema)
async def create_project(
        project: ProjectCreate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Creating new project", extra={"project_name": project.name, "user_id": user_id})

    try:
        db_project = await workspace.add_project(project, user_id)
        api_logger.info("Project created successfully", extra={
            "project_id": db_project.id,
            "project_name": db_project.name
        })
        return db_project
    except Exception as e:
        api_logger.error("Failed to create project", extra={
            "project_name": project.name,
            "error": str(e)
        })
        raise


@router.get("/{project_id}", response_model=ProjectDetail)
async def get_project(
        project_id: str,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Fetching project", extra={"project_id": project_id})

    project = workspace.get_project(project_id)
    if not project:
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")

    store = workspace.store
    return ProjectDetail(
        **project.model_dump(),
        role=workspace.get_project_role(project_id, user_id),
        member_count=len(workspace.members(project_id)),
        document_count=len(store.where("documents", project_id=project_id)),
        open_rfi_count=len(store.where("rfis", project_id=project_id, status="open")),
        open_submittal_count=len(store.where("submittals", project_id=project_id, status="open")),
        open_task_count=len(store.where("tasks", project_id=project_id, status="open")),
    )


@router.put("/{project_id}", response_model=ProjectSchema)
async def update_project(
        project_id: str,
        project: ProjectUpdate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Updating project", extra={
        "project_id": project_id,
        "update_fields": list(project.model_dump(exclude_unset=True).keys())
    })

    db_project = await workspace.update_project(project_id, project, user_id)
    if not db_project:
        api_logger.warning("Project not found for update", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")

    api_logger.info("Project updated successfully", extra={"project_id": project_id})
    return db_project


@router.delete("/{project_id}")
async def delete_project(
        project_id: str,
        user_id: str = Depends(require_project_admin),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Deleting project", extra={"project_id": project_id, "user_id": user_id})

    try:
        removed = await workspace.delete_project(project_id)

        # Uploaded files of the project's documents
        await cleanup_service.release_uploads(removed.get("documents", []), workspace.store.all("documents"))

        api_logger.info(f"Successfully deleted project {project_id}")
        return {"success": True, "removed": {name: len(records) for name, records in removed.items()}}
    except Exception as e:
        api_logger.error(f"Failed to delete project: {str(e)}", extra={"project_id": project_id})
        raise


@router.get("/{project_id}/members", response_model=List[ProjectMemberSchema])
async def list_members(project_id: str, workspace: Workspace = Depends(get_workspace)):
    return workspace.members(project_id)


@router.put("/{project_id}/members", response_model=ProjectMemberSchema)
async def upsert_member(
        project_id: str,
        member: ProjectMemberCreate,
        user_id: str = Depends(require_project_admin),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Setting project member", extra={
        "project_id": project_id,
        "member_user_id": member.user_id,
        "role": member.role
    })
    return await workspace.add_member(project_id, member.user_id, member.role)


@router.delete("/{project_id}/members/{member_user_id}")
async def remove_member(
        project_id: str,
        member_user_id: str,
        user_id: str = Depends(require_project_admin),
        workspace: Workspace = Depends(get_workspace),
):
    if not await workspace.remove_member(project_id, member_user_id):
        raise HTTPException(status_code=404, detail="Member not found")
    api_logger.info("Removed project member", extra={"project_id": project_id, "member_user_id": member_user_id})
    return {"success": True}


@router.get("/{project_id}/role")
async def get_role(
        project_id: str,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    return {"project_id": project_id, "user_id": user_id, "role": workspace.get_project_role(project_id, user_id)}
