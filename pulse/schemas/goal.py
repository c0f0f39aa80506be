from typing import List, Union
from pydantic import Field, field_validator

from pulse.core.ids import new_id
from pulse.schemas.common import CamelModel, required_text

# Schemas objectifs

def split_plans(value: Union[str, List[str]]) -> List[str]:
    """Accepts a newline-delimited block or a list; blank lines are dropped."""
    lines = value.splitlines() if isinstance(value, str) else value
    return [line.strip() for line in lines if line.strip()]

class GoalDraft(CamelModel):
    title: str
    timeline: str = ""
    plans: List[str] = []

    @field_validator("title")
    @classmethod
    def check_title(cls, v: str) -> str:
        return required_text(v)

    @field_validator("timeline")
    @classmethod
    def strip_timeline(cls, v: str) -> str:
        return v.strip()

    @field_validator("plans", mode="before")
    @classmethod
    def clean_plans(cls, v):
        return split_plans(v) if v is not None else []

class Goal(GoalDraft):
    id: str = Field(default_factory=new_id)
