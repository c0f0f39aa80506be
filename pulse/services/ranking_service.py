"""
Service de classement des tâches.

Ordre d'affichage (règle retenue):
1. pending avant completed
2. isSerious avant le reste
3. deadline croissante

Notifications: tâches pending dont la deadline tombe avant now + 24h
(les tâches en retard incluses) ou marquées isSerious, triées par deadline.
Rien n'est mis en cache: tout est recalculé à chaque appel.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple

from pulse.core.config import settings
from pulse.core.ids import utcnow
from pulse.schemas.task import EstimatedTime, Notification, Task, TaskStats, TaskStatus

OVERDUE = "overdue"
CRITICAL = "critical"
STARTING_SOON = "starting soon"
APPROACHING = "approaching"
ON_TRACK = "on track"


def display_key(task: Task) -> Tuple[int, int, datetime]:
    return (
        0 if task.status == TaskStatus.PENDING else 1,
        0 if task.is_serious else 1,
        task.deadline,
    )


def sort_for_display(tasks: Iterable[Task]) -> List[Task]:
    # sorted() est stable: à clé égale l'ordre d'insertion est conservé
    return sorted(tasks, key=display_key)


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    now = now or utcnow()
    return task.is_pending and task.deadline < now


def notification_tasks(tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Task]:
    now = now or utcnow()
    horizon = now + timedelta(hours=settings.NOTIFY_WINDOW_HOURS)
    selected = [
        t for t in tasks
        if t.is_pending and (t.deadline < horizon or t.is_serious)
    ]
    return sorted(selected, key=lambda t: t.deadline)


def notification_label(task: Task, now: Optional[datetime] = None) -> str:
    if is_overdue(task, now):
        return OVERDUE
    if task.is_serious:
        return CRITICAL
    return STARTING_SOON


def notifications(tasks: Iterable[Task], now: Optional[datetime] = None) -> List[Notification]:
    now = now or utcnow()
    return [
        Notification(task=t, label=notification_label(t, now))
        for t in notification_tasks(tasks, now)
    ]


def deadline_status(task: Task, now: Optional[datetime] = None) -> Optional[str]:
    """Label shown under a pending task; completed tasks get none."""
    if not task.is_pending:
        return None
    now = now or utcnow()
    if task.deadline < now:
        return OVERDUE
    if task.deadline < now + timedelta(days=settings.APPROACHING_DAYS):
        return APPROACHING
    return ON_TRACK


def format_estimated_time(estimate: EstimatedTime) -> str:
    parts = []
    if estimate.days > 0:
        parts.append(f"{estimate.days}d")
    if estimate.hours > 0:
        parts.append(f"{estimate.hours}h")
    if estimate.minutes > 0:
        parts.append(f"{estimate.minutes}m")
    return " ".join(parts) if parts else "0m"


def task_stats(tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskStats:
    now = now or utcnow()
    tasks = list(tasks)
    return TaskStats(
        pending=sum(1 for t in tasks if t.is_pending),
        completed=sum(1 for t in tasks if not t.is_pending),
        serious=sum(1 for t in tasks if t.is_pending and t.is_serious),
        overdue=sum(1 for t in tasks if is_overdue(t, now)),
        actual_hours=sum(t.actual_time_taken or 0 for t in tasks),
    )
