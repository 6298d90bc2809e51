# backend/constructiq/schemas/document.py
import enum
from pathlib import PurePosixPath
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from .base import BaseSchema, ProjectRecord, RequiredText


class DocumentType(str, enum.Enum):
    FOLDER = "folder"
    FILE = "file"


class FilePayload(BaseSchema):
    reference: str  # location of the stored bytes, relative to STORAGE_PATH
    filename: str
    size: int = Field(default=0, ge=0)
    mime_type: str = "application/octet-stream"

    @field_validator("reference")
    @classmethod
    def _relative_reference(cls, value: str) -> str:
        path = PurePosixPath(value.replace("\\", "/"))
        if not value or path.is_absolute() or ".." in path.parts or ":" in value:
            raise ValueError("reference must be a relative path inside the storage directory")
        return value


class DocumentBase(BaseSchema):
    name: RequiredText
    type: DocumentType
    parent_id: Optional[str] = None
    file_data: Optional[FilePayload] = None

    @model_validator(mode="after")
    def _folders_carry_no_payload(self):
        if self.type == DocumentType.FOLDER and self.file_data is not None:
            raise ValueError("folders cannot carry file data")
        return self


class DocumentCreate(DocumentBase):
    project_id: str


class DocumentUpdate(BaseSchema):
    name: RequiredText


class DocumentMove(BaseSchema):
    parent_id: Optional[str] = None


class DocumentCopy(BaseSchema):
    parent_id: Optional[str] = None


class Document(DocumentBase, ProjectRecord):

    @property
    def is_folder(self) -> bool:
        return self.type == DocumentType.FOLDER


class DocumentListing(BaseSchema):
    folder_id: Optional[str] = None
    breadcrumb: List[Document] = []
    items: List[Document] = []
