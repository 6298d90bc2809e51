# backend/constructiq/api/specifications.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_workspace
from ..schemas.specification import Specification as SpecificationSchema, SpecificationCreate, SpecificationUpdate
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/specifications", tags=["specifications"])


@router.get("/project/{project_id}", response_model=List[SpecificationSchema])
async def list_project_specifications(project_id: str, workspace: Workspace = Depends(get_workspace)):
    return workspace.specifications(project_id)


@router.post("", response_model=SpecificationSchema)
async def create_specification(spec: SpecificationCreate, workspace: Workspace = Depends(get_workspace)):
    if not workspace.get_project(spec.project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    db_spec = await workspace.add_spec(spec.project_id, spec)
    api_logger.info("Specification created", extra={"spec_id": db_spec.id, "number": db_spec.number})
    return db_spec


@router.put("/{spec_id}", response_model=SpecificationSchema)
async def update_specification(spec_id: str, spec: SpecificationUpdate, workspace: Workspace = Depends(get_workspace)):
    db_spec = await workspace.update_spec(spec_id, spec)
    if not db_spec:
        raise HTTPException(status_code=404, detail="Specification not found")
    return db_spec


@router.delete("/{spec_id}")
async def delete_specification(spec_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_spec(spec_id):
        raise HTTPException(status_code=404, detail="Specification not found")
    return {"success": True}
