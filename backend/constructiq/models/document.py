# backend/constructiq/models/document.py
from sqlalchemy import Column, JSON, String

from ..database import Base
from ._columns import created_at_column, id_column, project_id_column


class Document(Base):
    __tablename__ = "documents"

    id = id_column()
    project_id = project_id_column()
    # No foreign key: subtree deletes remove parents and children in one statement
    parent_id = Column(String(36), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False)
    file_data = Column(JSON, nullable=True)  # reference, filename, size, mimeType
    created_at = created_at_column()
