# backend/constructiq/models/activity.py
from sqlalchemy import Column, String, Text

from ..database import Base
from ._columns import created_at_column, id_column, project_id_column


class ActivityEntry(Base):
    __tablename__ = "activity_feed"

    id = id_column()
    project_id = project_id_column()
    type = Column(String(20), nullable=False)
    action = Column(String(50), nullable=False)
    details = Column(Text, nullable=True)
    user_id = Column(String(255), nullable=True)
    created_at = created_at_column()
