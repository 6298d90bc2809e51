# backend/constructiq/api/submittals.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_current_user_id, get_workspace
from ..schemas.submittal import Submittal as SubmittalSchema, SubmittalCreate, SubmittalStatus, SubmittalUpdate
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/submittals", tags=["submittals"])


@router.get("/project/{project_id}", response_model=List[SubmittalSchema])
async def list_project_submittals(
        project_id: str,
        status: Optional[SubmittalStatus] = None,
        workspace: Workspace = Depends(get_workspace),
):
    submittals = workspace.store.where("submittals", project_id=project_id)
    if status is not None:
        submittals = [s for s in submittals if s.status == status]
    return sorted(submittals, key=lambda s: s.submittal_number)


@router.post("", response_model=SubmittalSchema)
async def create_submittal(
        submittal: SubmittalCreate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Creating new submittal", extra={"project_id": submittal.project_id, "title": submittal.title})

    if not workspace.get_project(submittal.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    db_submittal = await workspace.add_submittal(submittal.project_id, submittal, user_id)
    api_logger.info("Submittal created successfully", extra={
        "submittal_id": db_submittal.id,
        "submittal_number": db_submittal.submittal_number
    })
    return db_submittal


@router.get("/{submittal_id}", response_model=SubmittalSchema)
async def get_submittal(submittal_id: str, workspace: Workspace = Depends(get_workspace)):
    submittal = workspace.store.get("submittals", submittal_id)
    if not submittal:
        raise HTTPException(status_code=404, detail="Submittal not found")
    return submittal


@router.put("/{submittal_id}", response_model=SubmittalSchema)
async def update_submittal(
        submittal_id: str,
        submittal: SubmittalUpdate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    db_submittal = await workspace.update_submittal(submittal_id, submittal, user_id)
    if not db_submittal:
        api_logger.warning("Submittal not found for update", extra={"submittal_id": submittal_id})
        raise HTTPException(status_code=404, detail="Submittal not found")
    return db_submittal


@router.delete("/{submittal_id}")
async def delete_submittal(submittal_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_submittal(submittal_id):
        raise HTTPException(status_code=404, detail="Submittal not found")
    api_logger.info(f"Successfully deleted submittal {submittal_id}")
    return {"success": True}
