# backend/constructiq/api/documents.py
import time
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse

from ..config import settings
from ..dependencies import get_workspace
from ..schemas.document import (
    Document as DocumentSchema,
    DocumentCopy,
    DocumentCreate,
    DocumentListing,
    DocumentMove,
    DocumentType,
    DocumentUpdate,
    FilePayload,
)
from ..services.cleanup import cleanup_service
from ..services.workspace import Workspace
from ..utils.files import delete_file, get_relative_path, resolve_upload, save_upload_file
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _display_order(document: DocumentSchema):
    # Folders first, then by name
    return (not document.is_folder, document.name.casefold())


def _get_or_404(workspace: Workspace, document_id: str) -> DocumentSchema:
    document = workspace.documents.get(document_id)
    if not document:
        api_logger.warning("Document not found", extra={"document_id": document_id})
        raise HTTPException(status_code=404, detail="Document not found")
    return document


@router.get("/project/{project_id}", response_model=DocumentListing)
async def list_project_documents(
        project_id: str,
        folder_id: Optional[str] = None,
        workspace: Workspace = Depends(get_workspace),
):
    """One level of the project's tree plus the breadcrumb to it"""
    api_logger.info("Listing documents for project", extra={
        "project_id": project_id,
        "folder_id": folder_id,
        "operation": "list_project_documents"
    })

    start_time = time.time()
    tree = workspace.documents
    if folder_id is not None:
        folder = _get_or_404(workspace, folder_id)
        if folder.project_id != project_id or not folder.is_folder:
            raise HTTPException(status_code=404, detail="Folder not found")

    items = sorted(tree.list_children(project_id, folder_id), key=_display_order)

    execution_time = time.time() - start_time
    api_logger.info("Successfully listed project documents", extra={
        "project_id": project_id,
        "document_count": len(items),
        "execution_time_ms": round(execution_time * 1000, 2)
    })
    return DocumentListing(folder_id=folder_id, breadcrumb=tree.breadcrumb(folder_id), items=items)


@router.post("", response_model=DocumentSchema)
async def create_document(document: DocumentCreate, workspace: Workspace = Depends(get_workspace)):
    if document.file_data is not None:
        # File references are only minted by the upload route
        raise HTTPException(status_code=400, detail="Upload file content through /api/documents/upload")

    api_logger.info("Creating new document", extra={
        "project_id": document.project_id,
        "document_name": document.name,
        "document_type": document.type.value
    })

    db_document = await workspace.documents.add(
        document.project_id, document.parent_id, document.name, document.type
    )
    api_logger.info("Successfully created document", extra={
        "document_id": db_document.id,
        "project_id": db_document.project_id
    })
    return db_document


@router.post("/upload", response_model=DocumentSchema)
async def upload_document(
        project_id: str = Form(...),
        parent_id: Optional[str] = Form(None),
        file: UploadFile = File(...),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Uploading file", extra={
        "project_id": project_id,
        "parent_id": parent_id,
        "upload_filename": file.filename
    })

    file_path = await save_upload_file(file, settings.UPLOADS_PATH)
    payload = FilePayload(
        reference=get_relative_path(file_path, settings.STORAGE_PATH),
        filename=file.filename or file_path.name,
        size=file_path.stat().st_size,
        mime_type=file.content_type or "application/octet-stream",
    )

    try:
        return await workspace.documents.add(project_id, parent_id, payload.filename, DocumentType.FILE, payload)
    except Exception as e:
        # The node was never created, so nothing references the bytes
        await delete_file(file_path)
        api_logger.error("Error storing uploaded file", extra={"project_id": project_id, "error": str(e)})
        raise


@router.get("/{document_id}", response_model=DocumentSchema)
async def get_document(document_id: str, workspace: Workspace = Depends(get_workspace)):
    return _get_or_404(workspace, document_id)


@router.get("/{document_id}/breadcrumb", response_model=List[DocumentSchema])
async def get_breadcrumb(document_id: str, workspace: Workspace = Depends(get_workspace)):
    _get_or_404(workspace, document_id)
    return workspace.documents.breadcrumb(document_id)


@router.get("/{document_id}/download")
async def download_document(document_id: str, workspace: Workspace = Depends(get_workspace)):
    document = _get_or_404(workspace, document_id)
    if document.is_folder or not document.file_data:
        raise HTTPException(status_code=400, detail="Only files can be downloaded")

    file_path = resolve_upload(document.file_data.reference)
    if file_path is None or not file_path.exists():
        api_logger.warning("Stored file missing", extra={"document_id": document_id, "path": str(file_path)})
        raise HTTPException(status_code=404, detail="File not available")

    return FileResponse(file_path, media_type=document.file_data.mime_type, filename=document.name)


@router.put("/{document_id}", response_model=DocumentSchema)
async def rename_document(document_id: str, document: DocumentUpdate, workspace: Workspace = Depends(get_workspace)):
    original = _get_or_404(workspace, document_id)
    db_document = await workspace.documents.rename(document_id, document.name)
    if not db_document:
        raise HTTPException(status_code=404, detail="Document not found")

    api_logger.info("Successfully renamed document", extra={
        "document_id": document_id,
        "original_values": {"name": original.name},
        "new_values": {"name": db_document.name}
    })
    return db_document


@router.post("/{document_id}/move", response_model=DocumentSchema)
async def move_document(document_id: str, move: DocumentMove, workspace: Workspace = Depends(get_workspace)):
    _get_or_404(workspace, document_id)
    moved = await workspace.documents.move(document_id, move.parent_id)
    if not moved:
        raise HTTPException(status_code=404, detail="Document not found")
    return moved


@router.post("/{document_id}/copy", response_model=List[DocumentSchema])
async def copy_document(document_id: str, copy: DocumentCopy, workspace: Workspace = Depends(get_workspace)):
    _get_or_404(workspace, document_id)
    return await workspace.documents.copy(document_id, copy.parent_id)


@router.delete("/{document_id}")
async def delete_document(document_id: str, workspace: Workspace = Depends(get_workspace)):
    api_logger.info("Deleting document", extra={"document_id": document_id})
    _get_or_404(workspace, document_id)

    try:
        removed = await workspace.documents.delete(document_id)

        # Delete uploaded bytes no remaining node points at
        await cleanup_service.release_uploads(removed, workspace.store.all("documents"))

        api_logger.info(f"Successfully deleted document {document_id}", extra={"removed_count": len(removed)})
        return {"success": True, "removed": len(removed)}
    except Exception as e:
        api_logger.error(f"Failed to delete document: {str(e)}", extra={"document_id": document_id})
        raise
