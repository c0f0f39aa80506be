"""Create / Edit intents for form submissions."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Create:
    pass


@dataclass(frozen=True)
class Edit:
    id: str


Intent = Union[Create, Edit]
