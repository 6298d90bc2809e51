# backend/constructiq/models/directory.py
from sqlalchemy import Column, JSON, String

from ..database import Base
from ._columns import created_at_column, id_column, project_id_column


class DirUser(Base):
    __tablename__ = "dir_users"

    id = id_column()
    project_id = project_id_column()
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    permission = Column(String(100), nullable=True)
    created_at = created_at_column()


class DirCompany(Base):
    __tablename__ = "dir_companies"

    id = id_column()
    project_id = project_id_column()
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=True)
    contact = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    created_at = created_at_column()


class DistGroup(Base):
    __tablename__ = "dist_groups"

    id = id_column()
    project_id = project_id_column()
    name = Column(String(255), nullable=False)
    members = Column(JSON, nullable=True)  # DirUser ids
    created_at = created_at_column()
