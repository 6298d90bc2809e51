# backend/constructiq/api/tasks.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ..dependencies import get_current_user_id, get_workspace
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskStatus, TaskUpdate
from ..services.workspace import Workspace
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("/project/{project_id}", response_model=List[TaskSchema])
async def list_project_tasks(
        project_id: str,
        status: Optional[TaskStatus] = None,
        workspace: Workspace = Depends(get_workspace),
):
    tasks = workspace.store.where("tasks", project_id=project_id)
    if status is not None:
        tasks = [t for t in tasks if t.status == status]
    return sorted(tasks, key=lambda t: t.task_number)


@router.post("", response_model=TaskSchema)
async def create_task(
        task: TaskCreate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    api_logger.info("Creating new task", extra={"project_id": task.project_id, "title": task.title})

    if not workspace.get_project(task.project_id):
        raise HTTPException(status_code=404, detail="Project not found")

    db_task = await workspace.add_task(task.project_id, task, user_id)
    api_logger.info("Task created successfully", extra={
        "task_id": db_task.id,
        "task_number": db_task.task_number
    })
    return db_task


@router.get("/{task_id}", response_model=TaskSchema)
async def get_task(task_id: str, workspace: Workspace = Depends(get_workspace)):
    task = workspace.store.get("tasks", task_id)
    if not task:
        api_logger.warning("Task not found", extra={"task_id": task_id})
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.put("/{task_id}", response_model=TaskSchema)
async def update_task(
        task_id: str,
        task: TaskUpdate,
        user_id: str = Depends(get_current_user_id),
        workspace: Workspace = Depends(get_workspace),
):
    db_task = await workspace.update_task(task_id, task, user_id)
    if not db_task:
        api_logger.warning("Task not found for update", extra={"task_id": task_id})
        raise HTTPException(status_code=404, detail="Task not found")
    return db_task


@router.delete("/{task_id}")
async def delete_task(task_id: str, workspace: Workspace = Depends(get_workspace)):
    if not await workspace.delete_task(task_id):
        raise HTTPException(status_code=404, detail="Task not found")
    api_logger.info(f"Successfully deleted task {task_id}")
    return {"success": True}
