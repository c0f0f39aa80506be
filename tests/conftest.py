import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer l'app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer l'app
import pulse.core.database
pulse.core.database.engine = test_engine
pulse.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer l'app (qui utilisera notre engine SQLite)
import pulse.models.stored_value  # noqa: F401
from pulse.core.database import Base
from pulse.main import app
from pulse.services.controller import Controller, get_controller
from pulse.services.github_service import GitHubSyncClient
from pulse.services.local_store import LocalStore

TEST_API_URL = "https://api.github.test"
TEST_TOKEN = "ghp_test_token"


# ============ FAUX SERVEUR GITHUB ============

class FakeResponse:
    """Bare minimum of requests.Response used by the sync client"""

    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON body")
        return self._payload


class FakeContentsAPI:
    """
    In-memory stand-in for the GitHub contents API, used as the client session.

    - GET  -> 200 {sha, content} / 404 / 401
    - PUT  -> 201 create, 200 update, 409 when the sha does not match, 401
    """

    def __init__(self, token=TEST_TOKEN):
        self.token = token
        self.files = {}
        self.calls = []

    def _authorized(self, headers):
        return (headers or {}).get("Authorization") == f"token {self.token}"

    def get(self, url, headers=None, timeout=None):
        self.calls.append(("GET", url, None))
        if not self._authorized(headers):
            return FakeResponse(401, {"message": "Bad credentials"})
        if url not in self.files:
            return FakeResponse(404, {"message": "Not Found"})
        return FakeResponse(200, dict(self.files[url]))

    def put(self, url, headers=None, json=None, timeout=None):
        self.calls.append(("PUT", url, json))
        if not self._authorized(headers):
            return FakeResponse(401, {"message": "Bad credentials"})

        current = self.files.get(url)
        if current is not None and json.get("sha") != current["sha"]:
            return FakeResponse(409, {"message": "sha does not match"})
        if current is None and "sha" in json:
            return FakeResponse(422, {"message": "sha given for a new file"})

        sha = uuid.uuid4().hex
        # GitHub renvoie le base64 coupé en lignes de 60 caractères
        content = json["content"]
        wrapped = "\n".join(content[i:i + 60] for i in range(0, len(content), 60)) + "\n"
        self.files[url] = {"sha": sha, "content": wrapped}
        return FakeResponse(
            201 if current is None else 200,
            {"content": {"sha": sha}, "commit": {"message": json["message"]}},
        )

    @property
    def network_calls(self):
        return len(self.calls)


# ============ FIXTURES ============

@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def store():
    return LocalStore(TestingSessionLocal)


@pytest.fixture
def remote():
    return FakeContentsAPI()


@pytest.fixture
def sync_client(remote):
    return GitHubSyncClient(session=remote, base_url=TEST_API_URL, timeout=5)


@pytest.fixture
def controller(store, sync_client):
    return Controller(store, sync_client)


@pytest.fixture
def client(controller):
    """Client de test FastAPI branché sur le controller du test"""
    from fastapi.testclient import TestClient
    app.dependency_overrides[get_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sync_config():
    from pulse.schemas.sync import SyncConfig
    return SyncConfig(token=TEST_TOKEN, owner="someone", repo="todo-storage", path="data.json")
