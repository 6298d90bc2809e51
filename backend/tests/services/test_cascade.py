# tests/services/test_cascade.py
import pytest

from constructiq.registry import project_scoped
from constructiq.schemas import DocumentType, FilePayload
from constructiq.services.store import EntityStore


async def populate(workspace, project_id):
    user = await workspace.add_dir_user(project_id, {"firstName": "Ada", "lastName": "Stone"})
    await workspace.add_dir_company(project_id, {"name": "Stone Concrete"})
    await workspace.add_dist_group(project_id, {"name": "Structural", "members": [user.id]})
    folder = await workspace.documents.add(project_id, None, "Drawings", DocumentType.FOLDER)
    await workspace.documents.add(project_id, folder.id, "A-101.pdf", DocumentType.FILE, FilePayload(
        reference="uploads/a101.pdf", filename="A-101.pdf", size=12, mime_type="application/pdf"))
    await workspace.add_task(project_id, {"title": "Mobilize"})
    rfi = await workspace.add_rfi(project_id, {"subject": "Slab edge"})
    await workspace.add_rfi_response(rfi.id, {"text": "See detail 4/S-501"}, "user-1")
    await workspace.add_submittal(project_id, {"title": "Rebar shop drawings"})
    await workspace.add_spec(project_id, {"number": "03 30 00", "title": "Cast-in-place concrete"})


def referencing(store, project_id):
    return {c.name: len(store.where(c.name, project_id=project_id)) for c in project_scoped()
            if store.where(c.name, project_id=project_id)}


@pytest.mark.asyncio
async def test_delete_project_removes_every_dependent(workspace, project):
    other = await workspace.add_project({"name": "Tower B"}, "user-1")
    await populate(workspace, project.id)
    await populate(workspace, other.id)
    other_counts = referencing(workspace.store, other.id)

    removed = await workspace.delete_project(project.id)

    assert referencing(workspace.store, project.id) == {}
    assert workspace.get_project(project.id) is None
    assert referencing(workspace.store, other.id) == other_counts
    assert [p.id for p in removed["projects"]] == [project.id]
    assert len(removed["documents"]) == 2
    assert len(removed["project_members"]) == 1


@pytest.mark.asyncio
async def test_delete_project_is_durable(adapter, workspace, project):
    await populate(workspace, project.id)

    await workspace.delete_project(project.id)

    reloaded = EntityStore(adapter)
    await reloaded.load()
    assert referencing(reloaded, project.id) == {}
    assert reloaded.get("projects", project.id) is None


@pytest.mark.asyncio
async def test_dependents_removed_when_project_already_gone(workspace):
    await workspace.store.add("tasks", {"project_id": "ghost", "task_number": 1, "title": "Orphan"})

    removed = await workspace.delete_project("ghost")

    assert [t.title for t in removed["tasks"]] == ["Orphan"]
    assert "projects" not in removed
    assert workspace.store.where("tasks", project_id="ghost") == []
