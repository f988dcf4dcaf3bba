from typing import Any, Dict

from fastapi import APIRouter, Depends

from eunoia.services import ServiceManager
from eunoia.shared.models import TaskCreate, TaskUpdate
from ..dependencies import get_services, get_user_id, not_found
from .common import register_crud

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.post("", response_model=Dict[str, Any], status_code=201)
def create_task(body: TaskCreate, services: ServiceManager = Depends(get_services),
                user_id: str = Depends(get_user_id)):
    """Create a task"""
    task = services.tasks.create_task(user_id, **body.model_dump())
    return task.to_dict()


@router.post("/{task_id}/toggle", response_model=Dict[str, Any])
def toggle_task(task_id: str, services: ServiceManager = Depends(get_services),
                user_id: str = Depends(get_user_id)):
    """Flip a task between Completed and Pending"""
    task = services.tasks.toggle_status(user_id, task_id)
    if task is None:
        raise not_found("Task", task_id)
    return task.to_dict()


register_crud(router, "Task", lambda services: services.tasks, TaskUpdate)
