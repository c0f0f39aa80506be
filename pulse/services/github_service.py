"""
Service GitHub - synchronisation du document via l'API contents.

save: GET (récupère le sha si le fichier existe) puis PUT
fetch: GET puis décodage base64 -> JSON -> AppData
"""

import logging
from typing import Optional
from urllib.parse import quote

import requests

from pulse.core.config import settings
from pulse.core.errors import DeserializationError, SyncOutcome, SyncResult
from pulse.core.ids import utcnow
from pulse.schemas.app_data import AppData
from pulse.schemas.sync import SyncConfig
from pulse.services.codec import from_base64, to_base64

logger = logging.getLogger(__name__)


class GitHubSyncClient:
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        self.session = session or requests.Session()
        self.base_url = (base_url or settings.GITHUB_API_URL).rstrip("/")
        self.timeout = timeout or settings.SYNC_TIMEOUT

    def contents_url(self, config: SyncConfig) -> str:
        path = quote(config.path.lstrip("/"))
        return f"{self.base_url}/repos/{config.owner}/{config.repo}/contents/{path}"

    @staticmethod
    def headers(config: SyncConfig) -> dict:
        return {
            "Authorization": f"token {config.token}",
            "Accept": "application/vnd.github+json",
        }

    def current_sha(self, config: SyncConfig) -> Optional[str]:
        """sha of the remote file, or None when it is missing or unreadable."""
        try:
            response = self.session.get(
                self.contents_url(config), headers=self.headers(config), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"Could not read remote file metadata: {e}")
            return None

        if response.status_code == 404:
            logger.info("Remote file does not exist yet, creating it")
            return None
        if not response.ok:
            # le PUT échouera de lui-même si le token est mauvais
            logger.warning(f"Remote metadata read returned {response.status_code}")
            return None
        try:
            body = response.json()
        except ValueError as e:
            logger.warning(f"Remote metadata is not JSON: {e}")
            return None
        # un dossier renvoie une liste d'entrées, pas un fichier
        sha = body.get("sha") if isinstance(body, dict) else None
        if not isinstance(sha, str):
            logger.warning("Remote path is not a file, no sha available")
            return None
        return sha

    def save(self, config: SyncConfig, data: AppData) -> SyncResult:
        if not config.is_configured:
            return SyncResult(SyncOutcome.NOT_CONFIGURED)

        sha = self.current_sha(config)
        body = {
            "message": f"Sync App Data - {utcnow().isoformat()}",
            "content": to_base64(data),
        }
        if sha:
            body["sha"] = sha

        try:
            response = self.session.put(
                self.contents_url(config),
                headers=self.headers(config),
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"GitHub sync error: {e}")
            return SyncResult(SyncOutcome.FAILED, reason=str(e))

        if not response.ok:
            logger.error(f"GitHub sync rejected: {response.status_code}")
            return SyncResult(SyncOutcome.FAILED, reason=f"HTTP {response.status_code}")

        return SyncResult(SyncOutcome.OK)

    def fetch(self, config: SyncConfig) -> SyncResult:
        if not config.is_configured:
            return SyncResult(SyncOutcome.NOT_CONFIGURED)

        try:
            response = self.session.get(
                self.contents_url(config), headers=self.headers(config), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"GitHub fetch error: {e}")
            return SyncResult(SyncOutcome.FAILED, reason=str(e))

        if not response.ok:
            logger.error(f"GitHub fetch returned {response.status_code}")
            return SyncResult(SyncOutcome.FAILED, reason=f"HTTP {response.status_code}")

        try:
            content = response.json().get("content")
            if not isinstance(content, str):
                raise DeserializationError("remote file has no content")
            data = from_base64(content, AppData)
        except (ValueError, AttributeError, DeserializationError) as e:
            logger.error(f"GitHub fetch returned an unreadable document: {e}")
            return SyncResult(SyncOutcome.FAILED, reason=f"DeserializationError: {e}")

        return SyncResult(SyncOutcome.OK, data=data)
