from datetime import datetime
from typing import Optional
from pydantic import Field, field_validator

from pulse.core.config import settings
from pulse.schemas.app_data import AppData
from pulse.schemas.common import CamelModel

# Schemas synchronisation GitHub

class SyncConfig(CamelModel):
    token: str = ""
    owner: str = ""
    repo: str = ""
    path: str = Field(default_factory=lambda: settings.SYNC_PATH)

    @field_validator("token", "owner", "repo", "path")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()

    @property
    def is_configured(self) -> bool:
        return bool(self.token and self.owner and self.repo)

class SyncConfigView(CamelModel):
    """Config as shown back to the user: the token never leaves the app."""
    owner: str
    repo: str
    path: str
    configured: bool

    @classmethod
    def from_config(cls, config: SyncConfig) -> "SyncConfigView":
        return cls(owner=config.owner, repo=config.repo, path=config.path, configured=config.is_configured)

class SyncResponse(CamelModel):
    outcome: str
    detail: Optional[str] = None
    last_sync: Optional[datetime] = None
    data: Optional[AppData] = None
