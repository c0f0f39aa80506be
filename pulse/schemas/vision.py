from pydantic import Field, field_validator

from pulse.core.ids import new_id
from pulse.schemas.common import CamelModel, required_text

# Schemas visions

class VisionDraft(CamelModel):
    text: str
    timeline: str = ""

    @field_validator("text")
    @classmethod
    def check_text(cls, v: str) -> str:
        return required_text(v)

    @field_validator("timeline")
    @classmethod
    def strip_timeline(cls, v: str) -> str:
        return v.strip()

class Vision(VisionDraft):
    id: str = Field(default_factory=new_id)
