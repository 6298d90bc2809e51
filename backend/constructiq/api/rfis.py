# backend/constructiq/api/rfis.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_current_user_id, get_workspace
from ..schemas.rfi import Rfi as RfiSchema, RfiCreate, RfiResponseCreate, RfiStatus, RfiUpdate
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/rfis", tags=["rfis"])


@router.get("/project/{project_id}", response_model=List[RfiSchema])
async def list_project_rfis(
        project_id: str,
        status: Optional[RfiStatus] = None,
        workspace: Workspace = Depends(get_workspace),
):
    rfis = workspace.store.where("rfis", project_id=project_id)
    if status is not None:
        rfis = [r for r in rfis if r.status == status]
    return sorted(rfis, key=lambda r: r.rfi_number)


@router.get("/project/{project_id}/next-number")
async def next_rfi_number(project_id: str, workspace: Workspace = Depends(get_workspace)):
    """Number the create form pre-fills; not reserved until the RFI is stored"""
    return {"next_number": workspace.sequences.peek(project_id, "rfis")}


@router.post("", response_model=RfiSchema)
async def create_rfi(
        rfi: RfiCreate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Creating new RFI", extra={"project_id": rfi.project_id, "subject": rfi.subject})

    if not workspace.get_project(rfi.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    db_rfi = await workspace.add_rfi(rfi.project_id, rfi, user_id)
    api_logger.info("RFI created successfully", extra={"rfi_id": db_rfi.id, "rfi_number": db_rfi.rfi_number})
    return db_rfi


@router.get("/{rfi_id}", response_model=RfiSchema)
async def get_rfi(rfi_id: str, workspace: Workspace = Depends(get_workspace)):
    rfi = workspace.store.get("rfis", rfi_id)
    if not rfi:
        api_logger.warning("RFI not found", extra={"rfi_id": rfi_id})
        raise HTTPException(status_code=404, detail="RFI not found")
    return rfi


@router.put("/{rfi_id}", response_model=RfiSchema)
async def update_rfi(
        rfi_id: str,
        rfi: RfiUpdate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    db_rfi = await workspace.update_rfi(rfi_id, rfi, user_id)
    if not db_rfi:
        api_logger.warning("RFI not found for update", extra={"rfi_id": rfi_id})
        raise HTTPException(status_code=404, detail="RFI not found")
    return db_rfi


@router.post("/{rfi_id}/responses", response_model=RfiSchema)
async def add_response(
        rfi_id: str,
        response: RfiResponseCreate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    db_rfi = await workspace.add_rfi_response(rfi_id, response, user_id)
    if not db_rfi:
        raise HTTPException(status_code=404, detail="RFI not found")
    api_logger.info("RFI response added", extra={"rfi_id": rfi_id, "response_count": len(db_rfi.responses)})
    return db_rfi


@router.delete("/{rfi_id}")
async def delete_rfi(rfi_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_rfi(rfi_id):
        raise HTTPException(status_code=404, detail="RFI not found")
    api_logger.info(f"Successfully deleted RFI {rfi_id}")
    return {"success": True}
