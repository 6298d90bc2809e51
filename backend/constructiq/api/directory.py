# backend/constructiq/api/directory.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_workspace
from ..schemas.directory import (
    DirCompany as DirCompanySchema,
    DirCompanyCreate,
    DirCompanyUpdate,
    DirUser as DirUserSchema,
    DirUserCreate,
    DirUserUpdate,
    DistGroup as DistGroupSchema,
    DistGroupCreate,
    DistGroupUpdate,
)
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/directory", tags=["directory"])


def _require_project(workspace: Workspace, project_id: str) -> None:
    if not workspace.get_project(project_id):
        api_logger.warning("Project not found", extra={"project_id": project_id})
        raise HTTPException(status_code=404, detail="Project not found")


# Users

@router.get("/users/project/{project_id}", response_model=List[DirUserSchema])
async def list_users(project_id: str, workspace: Workspace = Depends(get_workspace)):
    users = workspace.store.where("dir_users", project_id=project_id)
    return sorted(users, key=lambda u: (u.last_name.casefold(), u.first_name.casefold()))


@router.post("/users", response_model=DirUserSchema)
async def create_user(user: DirUserCreate, workspace: Workspace = Depends(get_workspace)):
    _require_project(workspace, user.project_id)
    db_user = await workspace.add_dir_user(user.project_id, user)
    api_logger.info("Directory user created", extra={"dir_user_id": db_user.id, "project_id": db_user.project_id})
    return db_user


@router.put("/users/{user_id}", response_model=DirUserSchema)
async def update_user(user_id: str, user: DirUserUpdate, workspace: Workspace = Depends(get_workspace)):
    db_user = await workspace.update_dir_user(user_id, user)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.delete("/users/{user_id}")
async def delete_user(user_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_dir_user(user_id):
        raise HTTPException(status_code=404, detail="User not found")
    api_logger.info(f"Successfully deleted directory user {user_id}")
    return {"success": True}


# Companies

@router.get("/companies/project/{project_id}", response_model=List[DirCompanySchema])
async def list_companies(project_id: str, workspace: Workspace = Depends(get_workspace)):
    companies = workspace.store.where("dir_companies", project_id=project_id)
    return sorted(companies, key=lambda c: c.name.casefold())


@router.post("/companies", response_model=DirCompanySchema)
async def create_company(company: DirCompanyCreate, workspace: Workspace = Depends(get_workspace)):
    _require_project(workspace, company.project_id)
    db_company = await workspace.add_dir_company(company.project_id, company)
    api_logger.info("Directory company created", extra={"company_id": db_company.id})
    return db_company


@router.put("/companies/{company_id}", response_model=DirCompanySchema)
async def update_company(company_id: str, company: DirCompanyUpdate, workspace: Workspace = Depends(get_workspace)):
    db_company = await workspace.update_dir_company(company_id, company)
    if not db_company:
        raise HTTPException(status_code=404, detail="Company not found")
    return db_company


@router.delete("/companies/{company_id}")
async def delete_company(company_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_dir_company(company_id):
        raise HTTPException(status_code=404, detail="Company not found")
    return {"success": True}


# Distribution groups

@router.get("/groups/project/{project_id}", response_model=List[DistGroupSchema])
async def list_groups(project_id: str, workspace: Workspace = Depends(get_workspace)):
    return workspace.store.where("dist_groups", project_id=project_id)


@router.get("/groups/{group_id}/members")
async def list_group_members(group_id: str, workspace: Workspace = Depends(get_workspace)):
    """Member ids with their display names; removed users show a placeholder"""
    group = workspace.store.get("dist_groups", group_id)
    if not group:
        raise HTTPException(status_code=404, detail="Group not found")
    return [{"id": member, "name": workspace.display_name(member)} for member in group.members]


@router.post("/groups", response_model=DistGroupSchema)
async def create_group(group: DistGroupCreate, workspace: Workspace = Depends(get_workspace)):
    _require_project(workspace, group.project_id)
    db_group = await workspace.add_dist_group(group.project_id, group)
    api_logger.info("Distribution group created", extra={"group_id": db_group.id, "member_count": len(db_group.members)})
    return db_group


@router.put("/groups/{group_id}", response_model=DistGroupSchema)
async def update_group(group_id: str, group: DistGroupUpdate, workspace: Workspace = Depends(get_workspace)):
    db_group = await workspace.update_dist_group(group_id, group)
    if not db_group:
        raise HTTPException(status_code=404, detail="Group not found")
    return db_group


@router.delete("/groups/{group_id}")
async def delete_group(group_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_dist_group(group_id):
        raise HTTPException(status_code=404, detail="Group not found")
    return {"success": True}
