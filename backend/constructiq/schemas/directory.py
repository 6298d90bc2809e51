# backend/constructiq/schemas/directory.py
from typing import List, Optional

from .base import BaseSchema, ProjectRecord, RequiredText


class DirUserBase(BaseSchema):
    first_name: str = ""
    last_name: RequiredText
    email: str = ""
    permission: str = "company employee"


class DirUserCreate(DirUserBase):
    project_id: str


class DirUserUpdate(BaseSchema):
    first_name: Optional[str] = None
    last_name: Optional[RequiredText] = None
    email: Optional[str] = None
    permission: Optional[str] = None


class DirUser(DirUserBase, ProjectRecord):

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class DirCompanyBase(BaseSchema):
    name: RequiredText
    type: str = ""
    contact: str = ""
    email: str = ""
    phone: str = ""


class DirCompanyCreate(DirCompanyBase):
    project_id: str


class DirCompanyUpdate(BaseSchema):
    name: Optional[RequiredText] = None
    type: Optional[str] = None
    contact: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class DirCompany(DirCompanyBase, ProjectRecord):
    pass


class DistGroupBase(BaseSchema):
    name: RequiredText
    members: List[str] = []  # DirUser ids, may dangle after a user is removed


class DistGroupCreate(DistGroupBase):
    project_id: str


class DistGroupUpdate(BaseSchema):
    name: Optional[RequiredText] = None
    members: Optional[List[str]] = None


class DistGroup(DistGroupBase, ProjectRecord):
    pass
