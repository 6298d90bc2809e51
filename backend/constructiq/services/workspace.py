# backend/constructiq/services/workspace.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar, Union
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from .. import schemas
from ..schemas.activity import ActivityType
from ..schemas.base import Record
from ..utils.logging import service_logger
from ..utils.naming import natural_key, to_snake
from .activity import DEFAULT_FEED_LIMIT, ActivityJournal
from .cascade import CascadeManager
from .documents import DocumentTree
from .sequence import NUMBER_FIELDS, SequenceAssigner
from .store import EntityStore, validation_failure

ADMINISTRATOR = "administrator"
PLACEHOLDER = "—"

CreateModel = TypeVar("CreateModel", bound=BaseModel)
FieldBag = Union[Dict[str, Any], BaseModel]


def _coerce(model: Type[CreateModel], data: FieldBag, **overrides: Any) -> CreateModel:
    """Validate a plain field bag (or re-validate a model) into a create schema"""
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    fields = {to_snake(key): value for key, value in data.items()}
    try:
        return model.model_validate({**fields, **overrides})
    except ValidationError as e:
        raise validation_failure(e, model.__name__) from e


def _changes(data: FieldBag, *frozen: str) -> Dict[str, Any]:
    """Partial update fields in snake_case, minus the fields that never change"""
    if isinstance(data, BaseModel):
        data = data.model_dump(mode="json", exclude_unset=True)
    blocked = {"id", "created_at", "project_id", *frozen}
    return {key: value for key, value in ((to_snake(k), v) for k, v in data.items()) if key not in blocked}


class Workspace:
    """The mutators and derived queries the UI layer works with"""

    def __init__(self, store: EntityStore, activity_limit: int = DEFAULT_FEED_LIMIT):
        self.store = store
        self.sequences = SequenceAssigner(store)
        self.activity = ActivityJournal(store, limit=activity_limit)
        self.cascade = CascadeManager(store)
        self.documents = DocumentTree(store)

    async def load(self) -> None:
        await self.store.load()

    # Projects

    def get_project(self, project_id: str) -> Optional[schemas.Project]:
        return self.store.get("projects", project_id)

    async def add_project(self, data: FieldBag, user_id: Optional[str] = None) -> schemas.Project:
        """Create a project; the creator becomes its administrator"""
        project_in = _coerce(schemas.ProjectCreate, data)
        async with self.store.batch():
            project = await self.store.add("projects", project_in.model_dump(mode="json"))
            if user_id:
                await self.add_member(project.id, user_id, ADMINISTRATOR)

        await self.activity.record(project.id, ActivityType.PROJECT, "created",
                                   f'Project "{project.name}" created', user_id)
        service_logger.info("Project created", extra={"project_id": project.id, "user_id": user_id})
        return project

    async def update_project(self, project_id: str, data: FieldBag,
                             user_id: Optional[str] = None) -> Optional[schemas.Project]:
        project = await self.store.update("projects", project_id, _changes(data))
        if project is not None:
            await self.activity.record(project_id, ActivityType.PROJECT, "updated",
                                       "Project information updated", user_id)
        return project

    async def delete_project(self, project_id: str) -> Dict[str, List[Record]]:
        removed = await self.cascade.delete_project(project_id)
        self.sequences.forget(project_id)
        return removed

    # Members

    def members(self, project_id: str) -> List[schemas.ProjectMember]:
        return self.store.where("project_members", project_id=project_id)

    def _membership(self, project_id: str, user_id: str) -> Optional[schemas.ProjectMember]:
        found = self.store.where("project_members", project_id=project_id, user_id=user_id)
        return found[0] if found else None

    async def add_member(self, project_id: str, user_id: str, role: str = "member") -> schemas.ProjectMember:
        """Upsert: an existing (project, user) pair only gets its role updated"""
        member_in = _coerce(schemas.ProjectMemberCreate, {"user_id": user_id, "role": role})
        existing = self._membership(project_id, member_in.user_id)
        if existing is not None:
            return await self.store.update("project_members", existing.id, {"role": member_in.role})
        return await self.store.add("project_members", {
            "project_id": project_id, "user_id": member_in.user_id, "role": member_in.role,
        })

    async def remove_member(self, project_id: str, user_id: str) -> bool:
        existing = self._membership(project_id, user_id)
        if existing is None:
            return False
        await self.store.delete("project_members", existing.id)
        return True

    def get_project_role(self, project_id: str, user_id: str) -> Optional[str]:
        member = self._membership(project_id, user_id)
        return member.role if member else None

    def get_user_projects(self, user_id: str) -> List[schemas.Project]:
        project_ids = {m.project_id for m in self.store.where("project_members", user_id=user_id)}
        return [p for p in self.store.all("projects") if p.id in project_ids]

    # Directory

    async def _add_scoped(self, collection: str, model: Type[BaseModel], project_id: str, data: FieldBag) -> Record:
        record_in = _coerce(model, data, project_id=project_id)
        return await self.store.add(collection, record_in.model_dump(mode="json"))

    async def add_dir_user(self, project_id: str, data: FieldBag) -> schemas.DirUser:
        return await self._add_scoped("dir_users", schemas.DirUserCreate, project_id, data)

    async def update_dir_user(self, user_id: str, data: FieldBag) -> Optional[schemas.DirUser]:
        return await self.store.update("dir_users", user_id, _changes(data))

    async def delete_dir_user(self, user_id: str) -> Optional[schemas.DirUser]:
        # Group memberships and assignments keep the id and render it as a placeholder
        return await self.store.delete("dir_users", user_id)

    async def add_dir_company(self, project_id: str, data: FieldBag) -> schemas.DirCompany:
        return await self._add_scoped("dir_companies", schemas.DirCompanyCreate, project_id, data)

    async def update_dir_company(self, company_id: str, data: FieldBag) -> Optional[schemas.DirCompany]:
        return await self.store.update("dir_companies", company_id, _changes(data))

    async def delete_dir_company(self, company_id: str) -> Optional[schemas.DirCompany]:
        return await self.store.delete("dir_companies", company_id)

    async def add_dist_group(self, project_id: str, data: FieldBag) -> schemas.DistGroup:
        return await self._add_scoped("dist_groups", schemas.DistGroupCreate, project_id, data)

    async def update_dist_group(self, group_id: str, data: FieldBag) -> Optional[schemas.DistGroup]:
        return await self.store.update("dist_groups", group_id, _changes(data))

    async def delete_dist_group(self, group_id: str) -> Optional[schemas.DistGroup]:
        return await self.store.delete("dist_groups", group_id)

    def display_name(self, ref_id: Optional[str]) -> str:
        """Name of a directory user or company; a placeholder when it no longer resolves"""
        user = self.store.get("dir_users", ref_id)
        if user is not None:
            return user.display_name or PLACEHOLDER
        company = self.store.get("dir_companies", ref_id)
        if company is not None:
            return company.name
        return PLACEHOLDER

    # Numbered records

    async def _add_numbered(self, kind: str, record_in: BaseModel) -> Record:
        field = NUMBER_FIELDS[kind]
        fields = record_in.model_dump(mode="json")
        project_id = fields["project_id"]

        async with self.sequences.lock(project_id, kind):
            number = fields.get(field) or self.sequences.peek(project_id, kind)
            fields[field] = number
            async with self.store.batch():
                record = await self.store.add(kind, fields)
                await self.sequences.reserve(project_id, kind, number)
        return record

    async def add_task(self, project_id: str, data: FieldBag, user_id: Optional[str] = None) -> schemas.Task:
        task = await self._add_numbered("tasks", _coerce(schemas.TaskCreate, data, project_id=project_id))
        await self.activity.record(project_id, ActivityType.TASK, "created",
                                   f"Task #{task.task_number}: {task.title}", user_id)
        return task

    async def update_task(self, task_id: str, data: FieldBag, user_id: Optional[str] = None) -> Optional[schemas.Task]:
        task = await self.store.update("tasks", task_id, _changes(data, "task_number"))
        if task is not None:
            await self.activity.record(task.project_id, ActivityType.TASK, "updated",
                                       f"Task #{task.task_number}: {task.title} updated", user_id)
        return task

    async def delete_task(self, task_id: str) -> Optional[schemas.Task]:
        return await self.store.delete("tasks", task_id)

    async def add_rfi(self, project_id: str, data: FieldBag, user_id: Optional[str] = None) -> schemas.Rfi:
        rfi = await self._add_numbered("rfis", _coerce(schemas.RfiCreate, data, project_id=project_id))
        await self.activity.record(project_id, ActivityType.RFI, "created",
                                   f"RFI #{rfi.rfi_number}: {rfi.subject}", user_id)
        return rfi

    async def update_rfi(self, rfi_id: str, data: FieldBag, user_id: Optional[str] = None) -> Optional[schemas.Rfi]:
        rfi = await self.store.update("rfis", rfi_id, _changes(data, "rfi_number", "responses"))
        if rfi is not None:
            await self.activity.record(rfi.project_id, ActivityType.RFI, "updated",
                                       f"RFI #{rfi.rfi_number}: {rfi.subject} updated", user_id)
        return rfi

    async def add_rfi_response(self, rfi_id: str, data: FieldBag,
                               user_id: Optional[str] = None) -> Optional[schemas.Rfi]:
        """Append a response; responses are never edited, reordered or removed"""
        response_in = _coerce(schemas.RfiResponseCreate, data)
        rfi = self.store.get("rfis", rfi_id)
        if rfi is None:
            return None

        response = schemas.RfiResponse(
            id=str(uuid4()),
            author_id=user_id,
            text=response_in.text,
            created_at=datetime.now(timezone.utc),
        )
        responses = [r.model_dump(mode="json", by_alias=True) for r in rfi.responses]
        responses.append(response.model_dump(mode="json", by_alias=True))

        updated = await self.store.update("rfis", rfi_id, {"responses": responses})
        if updated is not None:
            await self.activity.record(updated.project_id, ActivityType.RFI, "response",
                                       f"RFI #{updated.rfi_number} received a response", user_id)
        return updated

    async def delete_rfi(self, rfi_id: str) -> Optional[schemas.Rfi]:
        return await self.store.delete("rfis", rfi_id)

    async def add_submittal(self, project_id: str, data: FieldBag,
                            user_id: Optional[str] = None) -> schemas.Submittal:
        submittal = await self._add_numbered(
            "submittals", _coerce(schemas.SubmittalCreate, data, project_id=project_id))
        await self.activity.record(project_id, ActivityType.SUBMITTAL, "created",
                                   f"Submittal #{submittal.submittal_number}: {submittal.title}", user_id)
        return submittal

    async def update_submittal(self, submittal_id: str, data: FieldBag,
                               user_id: Optional[str] = None) -> Optional[schemas.Submittal]:
        submittal = await self.store.update("submittals", submittal_id, _changes(data, "submittal_number"))
        if submittal is not None:
            await self.activity.record(submittal.project_id, ActivityType.SUBMITTAL, "updated",
                                       f"Submittal #{submittal.submittal_number} updated", user_id)
        return submittal

    async def delete_submittal(self, submittal_id: str) -> Optional[schemas.Submittal]:
        return await self.store.delete("submittals", submittal_id)

    # Specifications

    def specifications(self, project_id: str) -> List[schemas.Specification]:
        """Project specifications ordered by number, digit runs compared numerically"""
        specs = self.store.where("specifications", project_id=project_id)
        return sorted(specs, key=lambda spec: natural_key(spec.number))

    async def add_spec(self, project_id: str, data: FieldBag) -> schemas.Specification:
        return await self._add_scoped("specifications", schemas.SpecificationCreate, project_id, data)

    async def update_spec(self, spec_id: str, data: FieldBag) -> Optional[schemas.Specification]:
        return await self.store.update("specifications", spec_id, _changes(data))

    async def delete_spec(self, spec_id: str) -> Optional[schemas.Specification]:
        return await self.store.delete("specifications", spec_id)
