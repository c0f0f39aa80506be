"""
Controller: owns the single AppData / SyncConfig pair.

Every mutation goes through apply(): a pure command handler computes the new
document, the controller swaps it in, then writes it to the local store.
A failed local write is logged and kept in last_storage_error; the in-memory
document is not rolled back.

Remote sync calls are serialized: a second save/fetch while one is running
returns BUSY without touching the network.
"""

import logging
import threading
from datetime import datetime
from typing import Callable, List, Optional

from pulse.core.errors import StorageError, SyncOutcome, SyncResult
from pulse.core.ids import utcnow
from pulse.schemas.app_data import AppData
from pulse.schemas.sync import SyncConfig
from pulse.schemas.task import Notification, Task, TaskStats
from pulse.services import ranking_service
from pulse.services.github_service import GitHubSyncClient
from pulse.services.local_store import LocalStore

logger = logging.getLogger(__name__)


class Controller:
    def __init__(self, store: LocalStore, client: Optional[GitHubSyncClient] = None):
        self.store = store
        self.client = client or GitHubSyncClient()
        self.data: AppData = store.load_data()
        self.config: SyncConfig = store.load_config()
        self.last_storage_error: Optional[str] = None

        self._state_lock = threading.RLock()
        self._sync_lock = threading.Lock()

    # ---------- mutations ----------

    def apply(self, handler: Callable[..., AppData], *args, **kwargs) -> AppData:
        """Run `handler(current_data, *args, **kwargs)` and commit its result.

        Exceptions from the handler (validation, unknown id) propagate and
        leave the document unchanged.
        """
        with self._state_lock:
            new_data = handler(self.data, *args, **kwargs)
            self.data = new_data
            self._persist(self.store.save_data, new_data)
            return new_data

    def update_config(self, config: SyncConfig) -> SyncConfig:
        with self._state_lock:
            self.config = config
            self._persist(self.store.save_config, config)
            return config

    def _persist(self, save, value) -> None:
        try:
            save(value)
            self.last_storage_error = None
        except StorageError as e:
            logger.error(f"Local save failed, keeping in-memory state: {e}")
            self.last_storage_error = str(e)

    # ---------- lectures ----------

    def sorted_tasks(self) -> List[Task]:
        return ranking_service.sort_for_display(self.data.tasks)

    def notifications(self, now: Optional[datetime] = None) -> List[Notification]:
        return ranking_service.notifications(self.data.tasks, now)

    def stats(self, now: Optional[datetime] = None) -> TaskStats:
        return ranking_service.task_stats(self.data.tasks, now)

    # ---------- synchronisation ----------

    def save_remote(self) -> SyncResult:
        if not self._sync_lock.acquire(blocking=False):
            return SyncResult(SyncOutcome.BUSY)
        try:
            with self._state_lock:
                snapshot, config = self.data, self.config
            result = self.client.save(config, snapshot)
            if result.ok:
                stamped = self.apply(lambda d: d.model_copy(update={"last_sync": utcnow()}))
                logger.info(f"Data saved to GitHub at {stamped.last_sync.isoformat()}")
            return result
        finally:
            self._sync_lock.release()

    def fetch_remote(self) -> SyncResult:
        if not self._sync_lock.acquire(blocking=False):
            return SyncResult(SyncOutcome.BUSY)
        try:
            with self._state_lock:
                config = self.config
            result = self.client.fetch(config)
            if result.ok:
                self.apply(lambda _: result.data)
                logger.info("Data fetched from GitHub")
            return result
        finally:
            self._sync_lock.release()


_controller: Optional[Controller] = None
_controller_lock = threading.Lock()


def get_controller() -> Controller:
    """Dépendance FastAPI: controller unique du processus"""
    global _controller
    with _controller_lock:
        if _controller is None:
            from pulse.core import database
            database.init_db()
            _controller = Controller(LocalStore(database.SessionLocal))
        return _controller
