"""
Stockage local: deux emplacements clé/valeur opaques dans la table local_storage.

- <prefix>_todo_data -> AppData en JSON
- <prefix>_gh_config -> SyncConfig en JSON

La lecture ne lève jamais: valeur absente ou illisible -> document vide.
L'écriture lève StorageError, c'est à l'appelant de décider quoi en faire.
"""

import logging
from typing import Callable, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pulse.core.config import settings
from pulse.core.errors import DeserializationError, StorageError
from pulse.models.stored_value import StoredValue
from pulse.schemas.app_data import AppData
from pulse.schemas.common import CamelModel
from pulse.schemas.sync import SyncConfig
from pulse.services.codec import from_json, to_json

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=CamelModel)


class LocalStore:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    # raw get/set

    def get(self, key: str) -> Optional[str]:
        db = self.session_factory()
        try:
            row = db.get(StoredValue, key)
            return row.value if row else None
        except SQLAlchemyError as e:
            logger.warning(f"Could not read {key}: {e}")
            return None
        finally:
            db.close()

    def set(self, key: str, value: str) -> None:
        db = self.session_factory()
        try:
            row = db.get(StoredValue, key)
            if row is None:
                db.add(StoredValue(key=key, value=value))
            else:
                row.value = value
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Could not write {key}: {e}")
            raise StorageError(f"could not write {key}") from e
        finally:
            db.close()

    # documents

    def _load(self, key: str, model_cls: Type[M]) -> M:
        raw = self.get(key)
        if raw is None:
            return model_cls()
        try:
            return from_json(raw, model_cls)
        except DeserializationError as e:
            logger.warning(f"Stored {key} is unreadable, starting empty: {e}")
            return model_cls()

    def load_data(self) -> AppData:
        return self._load(settings.data_key, AppData)

    def save_data(self, data: AppData) -> None:
        self.set(settings.data_key, to_json(data))

    def load_config(self) -> SyncConfig:
        return self._load(settings.config_key, SyncConfig)

    def save_config(self, config: SyncConfig) -> None:
        self.set(settings.config_key, to_json(config))
