"""Root document persisted locally and pushed to the remote store."""

from datetime import datetime
from typing import List, Optional
from pydantic import field_validator

from pulse.core.ids import as_utc
from pulse.schemas.common import CamelModel
from pulse.schemas.dossier import PersonalCategory
from pulse.schemas.goal import Goal
from pulse.schemas.task import Task
from pulse.schemas.vision import Vision


class AppData(CamelModel):
    tasks: List[Task] = []
    visions: List[Vision] = []
    goals: List[Goal] = []
    personal_categories: List[PersonalCategory] = []
    last_sync: Optional[datetime] = None

    @field_validator("last_sync")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None
