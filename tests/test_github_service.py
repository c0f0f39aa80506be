"""
Tests du client de synchronisation GitHub.

On utilise le faux serveur (FakeContentsAPI) de conftest pour les allers-retours,
et des MagicMock pour les cas d'erreur réseau.
"""

import base64
import json
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import requests

from pulse.core.errors import SyncOutcome
from pulse.schemas.app_data import AppData
from pulse.schemas.dossier import SubItemDraft
from pulse.schemas.goal import GoalDraft
from pulse.schemas.intent import Create
from pulse.schemas.sync import SyncConfig
from pulse.schemas.task import TaskDraft
from pulse.services.dossier_service import submit_category, submit_item, submit_sub_item
from pulse.services.github_service import GitHubSyncClient
from pulse.services.planning_service import submit_goal
from pulse.services.task_service import submit_task, toggle_task

DEADLINE = datetime(2025, 3, 1, 18, 0, tzinfo=timezone.utc)


def full_document():
    data = submit_task(AppData(), Create(), TaskDraft(title="Write report", category="Work", deadline=DEADLINE))
    data = submit_task(data, Create(), TaskDraft(title="Café crème ☕", category="Personal", deadline=DEADLINE, is_serious=True))
    data = toggle_task(data, data.tasks[0].id)
    data = submit_goal(data, Create(), GoalDraft(title="Run", plans="Buy shoes\nTrain"))
    data = submit_category(data, Create(), "Documents")
    cat_id = data.personal_categories[0].id
    data = submit_item(data, cat_id, Create(), "Passport")
    item_id = data.personal_categories[0].items[0].id
    return submit_sub_item(data, cat_id, item_id, Create(), SubItemDraft(heading="Number", value="X123"))


def response(status_code, payload=None):
    mock = MagicMock()
    mock.status_code = status_code
    mock.ok = status_code < 400
    mock.json.return_value = payload
    return mock


# ============ TESTS SAVE ============

def test_save_creates_file_without_sha(sync_client, remote, sync_config):
    """Premier save: GET 404 puis PUT sans sha"""
    result = sync_client.save(sync_config, full_document())

    assert result.outcome == SyncOutcome.OK
    assert [c[0] for c in remote.calls] == ["GET", "PUT"]
    body = remote.calls[1][2]
    assert "sha" not in body
    assert body["message"].startswith("Sync App Data - ")


def test_save_overwrites_with_sha(sync_client, remote, sync_config):
    sync_client.save(sync_config, AppData())
    url = sync_client.contents_url(sync_config)
    first_sha = remote.files[url]["sha"]

    result = sync_client.save(sync_config, full_document())
    assert result.ok
    assert remote.calls[-1][2]["sha"] == first_sha
    assert remote.files[url]["sha"] != first_sha


def test_commit_message_embeds_timestamp(sync_client, remote, sync_config):
    sync_client.save(sync_config, AppData())
    message = remote.calls[1][2]["message"]
    stamp = datetime.fromisoformat(message.replace("Sync App Data - ", ""))
    assert abs(datetime.now(timezone.utc) - stamp) < timedelta(minutes=1)


def test_payload_is_pretty_json_in_base64(sync_client, remote, sync_config):
    data = full_document()
    sync_client.save(sync_config, data)

    text = base64.b64decode(remote.calls[1][2]["content"]).decode("utf-8")
    assert text.startswith("{\n  \"tasks\": [")
    assert "Café crème ☕" in text
    assert json.loads(text)["personalCategories"][0]["items"][0]["subItems"][0]["value"] == "X123"


def test_url_and_auth_header(sync_client, sync_config):
    assert sync_client.contents_url(sync_config) == "https://api.github.test/repos/someone/todo-storage/contents/data.json"
    assert sync_client.headers(sync_config)["Authorization"] == "token ghp_test_token"


def test_nested_path(sync_client):
    config = SyncConfig(token="t", owner="o", repo="r", path="/backups/pulse data.json")
    assert sync_client.contents_url(config).endswith("/contents/backups/pulse%20data.json")


def test_save_rejected_with_bad_token(sync_client, remote, sync_config):
    """Mauvais token: le GET échoue, on tente quand même le PUT qui échoue à son tour"""
    bad = sync_config.replace(token="wrong")
    result = sync_client.save(bad, AppData())

    assert result.outcome == SyncOutcome.FAILED
    assert [c[0] for c in remote.calls] == ["GET", "PUT"]
    assert remote.files == {}


def test_save_proceeds_when_metadata_read_fails(sync_config):
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")
    session.put.return_value = response(201, {})
    client = GitHubSyncClient(session=session, base_url="https://api.github.test")

    assert client.save(sync_config, AppData()).ok
    assert "sha" not in session.put.call_args.kwargs["json"]


@pytest.mark.parametrize("listing", [
    [{"name": "data.json", "type": "file", "sha": "abc"}],
    {"sha": 42},
])
def test_save_when_path_is_not_a_file(listing):
    """Un chemin de dossier renvoie une liste: pas de sha, le save ne plante pas"""
    session = MagicMock()
    session.get.return_value = response(200, listing)
    session.put.return_value = response(422, {"message": "path is a directory"})
    client = GitHubSyncClient(session=session)
    config = SyncConfig(token="t", owner="o", repo="r", path="")

    result = client.save(config, AppData())

    assert result.outcome == SyncOutcome.FAILED
    assert "sha" not in session.put.call_args.kwargs["json"]


def test_current_sha_ignores_directory_listing(sync_config):
    session = MagicMock()
    session.get.return_value = response(200, [{"name": "data.json", "sha": "abc"}])
    assert GitHubSyncClient(session=session).current_sha(sync_config) is None


def test_save_network_error_on_write(sync_config):
    session = MagicMock()
    session.get.return_value = response(404, {"message": "Not Found"})
    session.put.side_effect = requests.Timeout("too slow")
    client = GitHubSyncClient(session=session)

    result = client.save(sync_config, AppData())
    assert result.outcome == SyncOutcome.FAILED
    assert "too slow" in result.reason


def test_save_conflict_reported(sync_config):
    session = MagicMock()
    session.get.return_value = response(200, {"sha": "stale", "content": ""})
    session.put.return_value = response(409, {"message": "sha does not match"})
    client = GitHubSyncClient(session=session)

    result = client.save(sync_config, AppData())
    assert result.outcome == SyncOutcome.FAILED
    assert session.put.call_args.kwargs["json"]["sha"] == "stale"


def test_save_twice_identical(sync_client, remote, sync_config):
    """Deux saves identiques réussissent, le contenu visible reste le même"""
    data = full_document()
    url = sync_client.contents_url(sync_config)

    assert sync_client.save(sync_config, data).ok
    first = remote.files[url]
    assert sync_client.save(sync_config, data).ok
    second = remote.files[url]

    assert first["content"] == second["content"]
    assert first["sha"] != second["sha"]


# ============ TESTS FETCH ============

def test_save_then_fetch_round_trip(sync_client, sync_config):
    data = full_document().model_copy(update={"last_sync": DEADLINE})
    sync_client.save(sync_config, data)

    result = sync_client.fetch(sync_config)
    assert result.ok
    fetched = result.data
    assert fetched.model_copy(update={"last_sync": None}) == data.model_copy(update={"last_sync": None})


def test_fetch_missing_file(sync_client, sync_config):
    result = sync_client.fetch(sync_config)
    assert result.outcome == SyncOutcome.FAILED
    assert result.data is None


def test_fetch_bad_token(sync_client, sync_config):
    sync_client.save(sync_config, AppData())
    result = sync_client.fetch(sync_config.replace(token="wrong"))
    assert result.outcome == SyncOutcome.FAILED


def test_fetch_network_error(sync_config):
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("offline")
    result = GitHubSyncClient(session=session).fetch(sync_config)
    assert result.outcome == SyncOutcome.FAILED


@pytest.mark.parametrize("payload", [
    {"sha": "abc", "content": base64.b64encode(b"{broken").decode()},
    {"sha": "abc", "content": base64.b64encode(b'{"tasks": [{"title": ""}]}').decode()},
    {"sha": "abc", "content": "***not base64***"},
    {"sha": "abc", "content": base64.b64encode(b"\xff\xfe").decode()},
    {"sha": "abc"},
])
def test_fetch_unreadable_document(sync_config, payload):
    """Document distant corrompu -> échec, jamais de remplacement partiel"""
    session = MagicMock()
    session.get.return_value = response(200, payload)
    result = GitHubSyncClient(session=session).fetch(sync_config)

    assert result.outcome == SyncOutcome.FAILED
    assert result.data is None
    assert "DeserializationError" in result.reason


def test_fetch_does_not_write(sync_client, remote, sync_config):
    sync_client.save(sync_config, AppData())
    remote.calls.clear()
    sync_client.fetch(sync_config)
    assert [c[0] for c in remote.calls] == ["GET"]


# ============ TESTS GARDE-FOUS ============

@pytest.mark.parametrize("missing", ["token", "owner", "repo"])
def test_not_configured_makes_no_call(sync_client, remote, sync_config, missing):
    config = sync_config.replace(**{missing: ""})

    assert sync_client.save(config, AppData()).outcome == SyncOutcome.NOT_CONFIGURED
    assert sync_client.fetch(config).outcome == SyncOutcome.NOT_CONFIGURED
    assert remote.network_calls == 0
