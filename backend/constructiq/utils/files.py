# backend/constructiq/utils/files.py
import shutil
from pathlib import Path
from uuid import uuid4
from fastapi import UploadFile
from typing import Optional
from ..config import settings
from .logging import service_logger

async def save_upload_file(upload_file: UploadFile, directory: Path) -> Path:
    """Save an uploaded file with a unique name and return the path"""
    directory.mkdir(parents=True, exist_ok=True)

    # Create unique filename, keeping the extension
    file_extension = Path(upload_file.filename or "").suffix
    unique_filename = f"{uuid4()}{file_extension}"
    file_path = directory / unique_filename

    # Save file
    with file_path.open("wb") as buffer:
        shutil.copyfileobj(upload_file.file, buffer)

    return file_path

async def delete_file(file_path: Path) -> bool:
    """Delete a file if it exists; returns whether something was removed"""
    try:
        if file_path.exists():
            file_path.unlink()
            return True
    except OSError as e:
        service_logger.error(f"Error deleting file {file_path}: {e}")
    return False

def get_relative_path(absolute_path: Path, base_path: Path) -> str:
    """Convert absolute path to relative path for storage in file payloads"""
    # Ensure both paths are absolute
    absolute_path = Path(absolute_path).absolute()
    base_path = Path(base_path).absolute()

    return absolute_path.relative_to(base_path).as_posix()

def resolve_upload(reference: str) -> Optional[Path]:
    """Absolute path of an uploaded file; None when the reference leaves UPLOADS_PATH"""
    file_path = (settings.STORAGE_PATH / reference).resolve()
    if not file_path.is_relative_to(settings.UPLOADS_PATH.resolve()):
        service_logger.warning("Rejected file reference outside uploads", extra={"reference": reference})
        return None
    return file_path
