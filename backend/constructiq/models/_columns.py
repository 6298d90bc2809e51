# backend/constructiq/models/_columns.py
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.sql import func


def new_id() -> str:
    return str(uuid4())


def id_column() -> Column:
    # The store assigns the identifier on insert when the caller leaves it out
    return Column(String(36), primary_key=True, default=new_id)


def created_at_column() -> Column:
    return Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)


def project_id_column() -> Column:
    return Column(String(36), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
