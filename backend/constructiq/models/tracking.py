# backend/constructiq/models/tracking.py
from sqlalchemy import Column, Date, Integer, JSON, String, Text

from ..database import Base
from ._columns import created_at_column, id_column, project_id_column


class Task(Base):
    __tablename__ = "tasks"

    id = id_column()
    project_id = project_id_column()
    task_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, server_default="open")
    category = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=True)
    assignees = Column(JSON, nullable=True)
    distribution_list = Column(JSON, nullable=True)
    attachments = Column(JSON, nullable=True)
    created_at = created_at_column()


class Rfi(Base):
    __tablename__ = "rfis"

    id = id_column()
    project_id = project_id_column()
    rfi_number = Column(Integer, nullable=False)
    subject = Column(String(255), nullable=False)
    question = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, server_default="open")
    due_date = Column(Date, nullable=True)
    rfi_manager = Column(String(36), nullable=True)
    received_from = Column(String(36), nullable=True)
    assignees = Column(JSON, nullable=True)
    distribution_list = Column(JSON, nullable=True)
    responsible_contractor = Column(String(36), nullable=True)
    specification = Column(String(36), nullable=True)
    drawing_number = Column(String(100), nullable=True)
    attachments = Column(JSON, nullable=True)
    responses = Column(JSON, nullable=True)  # append-only list of responses
    created_at = created_at_column()


class Submittal(Base):
    __tablename__ = "submittals"

    id = id_column()
    project_id = project_id_column()
    submittal_number = Column(Integer, nullable=False)
    title = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, server_default="open")
    type = Column(String(100), nullable=True)
    spec_section = Column(String(100), nullable=True)
    due_date = Column(Date, nullable=True)
    assignee = Column(String(36), nullable=True)
    description = Column(Text, nullable=True)
    created_at = created_at_column()


class Specification(Base):
    __tablename__ = "specifications"

    id = id_column()
    project_id = project_id_column()
    number = Column(String(50), nullable=False)
    title = Column(String(255), nullable=True)
    created_at = created_at_column()


class SequenceCounter(Base):
    __tablename__ = "sequence_counters"

    id = id_column()
    project_id = project_id_column()
    kind = Column(String(50), nullable=False)
    last_number = Column(Integer, nullable=False, server_default="0")
    created_at = created_at_column()
