"""Task service: pure command handlers, AppData in -> new AppData out"""

from datetime import datetime
from typing import Optional

from pulse.core.config import settings
from pulse.core.errors import PulseValidationError
from pulse.core.ids import utcnow
from pulse.schemas.app_data import AppData
from pulse.schemas.intent import Edit, Intent
from pulse.schemas.task import Task, TaskDraft, TaskStatus, TaskUpdate
from pulse.services.entity_lists import find_by_id, remove_by_id, replace_by_id


def check_category(category: str) -> None:
    if category not in settings.CATEGORIES:
        raise PulseValidationError(
            f"Unknown category '{category}' (expected one of {', '.join(settings.CATEGORIES)})"
        )


def find_task(data: AppData, task_id: str) -> Task:
    return find_by_id(data.tasks, task_id, "Task")


def _with_tasks(data: AppData, tasks) -> AppData:
    return data.model_copy(update={"tasks": tasks})


def submit_task(data: AppData, intent: Intent, draft: TaskDraft, now: Optional[datetime] = None) -> AppData:
    check_category(draft.category)

    if isinstance(intent, Edit):
        # id, status, createdAt, completedAt et actualTimeTaken sont conservés
        updated = find_task(data, intent.id).replace(**draft.model_dump())
        return _with_tasks(data, replace_by_id(data.tasks, updated, "Task"))

    task = Task(**draft.model_dump(), created_at=now or utcnow())
    return _with_tasks(data, [*data.tasks, task])


def update_task(data: AppData, task_id: str, patch: TaskUpdate) -> AppData:
    changes = patch.model_dump(exclude_unset=True)
    if "category" in changes and changes["category"] is not None:
        check_category(changes["category"])

    updated = find_task(data, task_id).replace(**changes)
    return _with_tasks(data, replace_by_id(data.tasks, updated, "Task"))


def toggle_task(data: AppData, task_id: str, now: Optional[datetime] = None) -> AppData:
    task = find_task(data, task_id)
    if task.is_pending:
        updated = task.replace(status=TaskStatus.COMPLETED, completed_at=now or utcnow())
    else:
        updated = task.replace(status=TaskStatus.PENDING, completed_at=None)
    return _with_tasks(data, replace_by_id(data.tasks, updated, "Task"))


def record_actual_time(data: AppData, task_id: str, hours: float) -> AppData:
    task = find_task(data, task_id)
    if task.is_pending:
        raise PulseValidationError("Actual time can only be recorded on a completed task")
    updated = task.replace(actual_time_taken=hours)
    return _with_tasks(data, replace_by_id(data.tasks, updated, "Task"))


def delete_task(data: AppData, task_id: str) -> AppData:
    return _with_tasks(data, remove_by_id(data.tasks, task_id, "Task"))
