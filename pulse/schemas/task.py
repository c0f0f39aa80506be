"""Pydantic schemas for tasks."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, NonNegativeInt, field_validator, model_validator

from pulse.core.ids import as_utc, new_id, utcnow
from pulse.schemas.common import CamelModel, required_text


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class TimeSaving(str, Enum):
    VERY_MUCH = "very much"
    NOT_MUCH = "not much"
    MAY_NOT_SAVE = "may not save"


class EstimatedTime(CamelModel):
    days: NonNegativeInt = 0
    hours: NonNegativeInt = 0
    minutes: NonNegativeInt = 0


def clamp_level(value: int) -> int:
    # niveaux 1..5, on borne au lieu de rejeter
    if value < 0:
        raise ValueError("must be a non-negative integer")
    return min(max(value, 1), 5)


class TaskDraft(CamelModel):
    """User-editable fields of a task form."""

    title: str
    category: str
    deadline: datetime
    probable_completion: Optional[datetime] = None
    estimated_time: EstimatedTime = Field(default_factory=EstimatedTime)
    urgency: int = 3
    importance: int = 3
    time_saving: TimeSaving = TimeSaving.MAY_NOT_SAVE
    is_serious: bool = False

    @field_validator("title", "category")
    @classmethod
    def check_required(cls, v: str) -> str:
        return required_text(v)

    @field_validator("urgency", "importance")
    @classmethod
    def check_level(cls, v: int) -> int:
        return clamp_level(v)

    @field_validator("deadline", "probable_completion")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None

    @model_validator(mode="after")
    def default_probable_completion(self):
        if self.probable_completion is None:
            self.probable_completion = self.deadline
        return self


class Task(TaskDraft):
    id: str = Field(default_factory=new_id)
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    actual_time_taken: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("created_at", "completed_at")
    @classmethod
    def stamp_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None

    @model_validator(mode="after")
    def check_completion(self):
        if (self.status == TaskStatus.COMPLETED) != (self.completed_at is not None):
            raise ValueError("completedAt must be set exactly when the task is completed")
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == TaskStatus.PENDING


class TaskUpdate(CamelModel):
    """Partial patch; status goes through toggle only."""

    title: Optional[str] = None
    category: Optional[str] = None
    deadline: Optional[datetime] = None
    probable_completion: Optional[datetime] = None
    estimated_time: Optional[EstimatedTime] = None
    urgency: Optional[int] = None
    importance: Optional[int] = None
    time_saving: Optional[TimeSaving] = None
    is_serious: Optional[bool] = None


class ActualTimeRequest(CamelModel):
    hours: float = Field(ge=0, allow_inf_nan=False)


class TaskStats(BaseModel):
    pending: int
    completed: int
    serious: int
    overdue: int
    actual_hours: float


class TaskView(CamelModel):
    """Task plus the labels derived at evaluation time."""

    task: Task
    deadline_status: Optional[str] = None
    estimated: str


class Notification(CamelModel):
    task: Task
    label: str
