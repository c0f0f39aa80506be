from fastapi import APIRouter, Depends, status
from typing import List

from pulse.core.config import settings
from pulse.schemas.intent import Create, Edit
from pulse.schemas.task import ActualTimeRequest, Task, TaskDraft, TaskStats, TaskUpdate, TaskView
from pulse.services import ranking_service, task_service
from pulse.services.controller import Controller, get_controller

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskView])
def list_tasks(controller: Controller = Depends(get_controller)):
    # ordre d'affichage: pending, serious, deadline
    return [
        TaskView(
            task=task,
            deadline_status=ranking_service.deadline_status(task),
            estimated=ranking_service.format_estimated_time(task.estimated_time),
        )
        for task in controller.sorted_tasks()
    ]


@router.get("/categories", response_model=List[str])
def list_categories():
    return settings.CATEGORIES


@router.get("/stats", response_model=TaskStats)
def stats(controller: Controller = Depends(get_controller)):
    return controller.stats()


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: str, controller: Controller = Depends(get_controller)):
    return task_service.find_task(controller.data, task_id)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(draft: TaskDraft, controller: Controller = Depends(get_controller)):
    data = controller.apply(task_service.submit_task, Create(), draft)
    return data.tasks[-1]


@router.put("/{task_id}", response_model=Task)
def edit_task(task_id: str, draft: TaskDraft, controller: Controller = Depends(get_controller)):
    data = controller.apply(task_service.submit_task, Edit(task_id), draft)
    return task_service.find_task(data, task_id)


@router.patch("/{task_id}", response_model=Task)
def patch_task(task_id: str, patch: TaskUpdate, controller: Controller = Depends(get_controller)):
    data = controller.apply(task_service.update_task, task_id, patch)
    return task_service.find_task(data, task_id)


@router.post("/{task_id}/toggle", response_model=Task)
def toggle_task(task_id: str, controller: Controller = Depends(get_controller)):
    data = controller.apply(task_service.toggle_task, task_id)
    return task_service.find_task(data, task_id)


@router.post("/{task_id}/actual-time", response_model=Task)
def record_actual_time(task_id: str, request: ActualTimeRequest, controller: Controller = Depends(get_controller)):
    data = controller.apply(task_service.record_actual_time, task_id, request.hours)
    return task_service.find_task(data, task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, controller: Controller = Depends(get_controller)):
    controller.apply(task_service.delete_task, task_id)
