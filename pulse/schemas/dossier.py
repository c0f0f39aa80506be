"""Schemas du dossier: PersonalCategory -> PersonalItem -> PersonalSubItem"""

from typing import List
from pydantic import Field, field_validator

from pulse.core.ids import new_id
from pulse.schemas.common import CamelModel, required_text


class NameRequest(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        return required_text(v)


class SubItemDraft(CamelModel):
    heading: str
    value: str

    @field_validator("heading", "value")
    @classmethod
    def check_required(cls, v: str) -> str:
        return required_text(v)


class PersonalSubItem(SubItemDraft):
    id: str = Field(default_factory=new_id)


class PersonalItem(NameRequest):
    id: str = Field(default_factory=new_id)
    sub_items: List[PersonalSubItem] = []


class PersonalCategory(NameRequest):
    id: str = Field(default_factory=new_id)
    items: List[PersonalItem] = []
