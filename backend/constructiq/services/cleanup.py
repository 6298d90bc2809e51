# backend/constructiq/services/cleanup.py
from typing import Iterable

from ..schemas.document import Document
from ..utils.files import delete_file, resolve_upload
from ..utils.logging import service_logger


class CleanupService:
    """Removes uploaded bytes once no document node refers to them"""

    @staticmethod
    async def release_uploads(removed: Iterable[Document], remaining: Iterable[Document]) -> int:
        """Delete the files of removed nodes that no surviving node shares.

        Copies reuse the original's stored bytes, so a file is only deleted
        when its last referencing node is gone.
        """
        in_use = {doc.file_data.reference for doc in remaining if doc.file_data}
        released = {doc.file_data.reference for doc in removed if doc.file_data} - in_use

        deleted = 0
        for reference in sorted(released):
            file_path = resolve_upload(reference)
            if file_path is not None and await delete_file(file_path):
                deleted += 1
                service_logger.info(f"Deleted uploaded file: {file_path}")

        return deleted


cleanup_service = CleanupService()
