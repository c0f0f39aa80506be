"""
Erreurs et résultats partagés entre les services.

ValidationError (pydantic) couvre les champs invalides à la construction,
PulseValidationError les règles métier vérifiées par les commandes.
Les issues de synchronisation ne sont pas des exceptions: voir SyncResult.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import ValidationError

__all__ = [
    "ValidationError",
    "PulseError",
    "PulseValidationError",
    "NotFoundError",
    "DeserializationError",
    "StorageError",
    "SyncOutcome",
    "SyncResult",
]


class PulseError(Exception):
    pass


class PulseValidationError(PulseError):
    """A mutation was rejected before it reached the document."""


class NotFoundError(PulseError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} {entity_id} not found")
        self.kind = kind
        self.entity_id = entity_id


class DeserializationError(PulseError):
    """Stored or remote JSON could not be turned back into a document."""


class StorageError(PulseError):
    """The local store refused a write (quota, locked database...)."""


class SyncOutcome(str, Enum):
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    FAILED = "sync_failed"
    BUSY = "busy"


@dataclass
class SyncResult:
    outcome: SyncOutcome
    data: Optional[object] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome == SyncOutcome.OK
