# backend/constructiq/schemas/specification.py
from typing import Optional

from .base import BaseSchema, ProjectRecord, RequiredText


class SpecificationBase(BaseSchema):
    number: RequiredText
    title: str = ""


class SpecificationCreate(SpecificationBase):
    project_id: str


class SpecificationUpdate(BaseSchema):
    number: Optional[RequiredText] = None
    title: Optional[str] = None


class Specification(SpecificationBase, ProjectRecord):
    pass
