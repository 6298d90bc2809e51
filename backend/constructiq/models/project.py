# backend/constructiq/models/project.py
from sqlalchemy import Column, Date, Float, String, Text, UniqueConstraint

from ..database import Base
from ._columns import created_at_column, id_column, project_id_column


class Project(Base):
    __tablename__ = "projects"

    id = id_column()
    name = Column(String(255), nullable=False)
    job_number = Column(String(100), nullable=True)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    zip = Column(String(20), nullable=True)
    county = Column(String(100), nullable=True)
    stage = Column(String(50), nullable=False, server_default="pre-construction")
    sector = Column(String(100), nullable=True)
    contract_value = Column(Float, nullable=True)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=True)
    actual_start_date = Column(Date, nullable=True)
    completion_date = Column(Date, nullable=True)
    projected_finish_date = Column(Date, nullable=True)
    warranty_start_date = Column(Date, nullable=True)
    warranty_end_date = Column(Date, nullable=True)
    created_at = created_at_column()


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_member"),)

    id = id_column()
    project_id = project_id_column()
    user_id = Column(String(255), nullable=False, index=True)
    role = Column(String(50), nullable=False, server_default="member")
    created_at = created_at_column()
