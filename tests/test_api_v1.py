import json
import logging

import pytest
from fastapi.testclient import TestClient

from treeview.main import app
from treeview.models import PageMeta
from treeview.wikijs_client import WikiError, WikiJSClient


client = TestClient(app)

WIKI_PAGES = [
    PageMeta(name="home", tags=["start"], id=1),
    PageMeta(name="homelab/network", tags=[], id=2),
    PageMeta(name="homelab/gpu-vm", tags=["gpu"], id=3),
    PageMeta(name="_templates/page", tags=[], id=4),
]


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("WIKIJS_BASE_URL", "http://wikijs.local")
    monkeypatch.setenv("WIKIJS_API_TOKEN", "test-token")
    monkeypatch.delenv("TREEVIEW_API_KEY", raising=False)
    monkeypatch.delenv("TREEVIEW_PAGE_EXCLUDE_REGEX", raising=False)
    monkeypatch.setenv("TREEVIEW_EXCLUSIONS", '[{"type": "regex", "rule": "^_"}]')

    async def fake_list_pages(self):
        return list(WIKI_PAGES)

    monkeypatch.setattr(WikiJSClient, "list_pages", fake_list_pages)


def test_health():
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert "X-Request-Id" in r.headers


def test_ready_returns_503_with_reason_when_env_missing(monkeypatch):
    monkeypatch.delenv("WIKIJS_BASE_URL", raising=False)
    monkeypatch.delenv("WIKIJS_API_TOKEN", raising=False)

    r = client.get("/api/v1/ready")
    assert r.status_code == 503
    assert r.json() == {
        "ready": False,
        "reason": "WIKIJS_BASE_URL missing; WIKIJS_API_TOKEN missing",
    }


def test_ready_reports_bad_exclusions(monkeypatch):
    monkeypatch.setenv("TREEVIEW_EXCLUSIONS", "{")

    r = client.get("/api/v1/ready")
    assert r.status_code == 503
    assert "TREEVIEW_EXCLUSIONS" in r.json()["reason"]


def test_ready_ok():
    r = client.get("/api/v1/ready")
    assert r.status_code == 200
    assert r.json()["ready"] is True


def test_auth_enforced_when_key_set(monkeypatch):
    monkeypatch.setenv("TREEVIEW_API_KEY", "secret")

    r = client.get("/api/v1/tree", params={"current_page": "home"})
    assert r.status_code == 401
    body = r.json()
    assert body["code"] == "unauthorized"
    assert body["message"] == "Invalid API key"

    r = client.get("/api/v1/tree", params={"current_page": "home"}, headers={"X-API-Key": "secret"})
    assert r.status_code == 200


def test_get_tree_uses_env_exclusions():
    r = client.get("/api/v1/tree", params={"current_page": "homelab/gpu-vm"})

    assert r.status_code == 200
    body = r.json()
    assert body["currentPage"] == "homelab/gpu-vm"
    assert [n["data"]["title"] for n in body["nodes"]] == ["home", "homelab"]

    home, homelab = body["nodes"]
    assert home["data"]["nodeType"] == "page"
    assert home["data"]["tags"] == ["start"]
    assert home["data"]["id"] == 1
    assert homelab["data"] == {
        "name": "homelab",
        "title": "homelab",
        "isCurrentPage": False,
        "nodeType": "folder",
    }
    gpu, network = homelab["nodes"]
    assert gpu["data"]["name"] == "homelab/gpu-vm"
    assert gpu["data"]["isCurrentPage"] is True
    assert network["data"]["isCurrentPage"] is False


def test_get_tree_shortcuts_follow_sorted_pages():
    r = client.get("/api/v1/tree", params={"current_page": "homelab/gpu-vm"})

    assert r.json()["treeShortcutPages"] == {"prevPage": "home", "nextPage": "homelab/network"}


def test_post_tree_overrides_config():
    r = client.post(
        "/api/v1/tree",
        json={
            "currentPage": "home",
            "config": {"exclusions": [{"type": "tags", "tags": ["gpu"]}]},
        },
    )

    assert r.status_code == 200
    body = r.json()
    assert [n["data"]["title"] for n in body["nodes"]] == ["_templates", "home", "homelab"]
    assert [n["data"]["title"] for n in body["nodes"][2]["nodes"]] == ["network"]
    assert body["treeShortcutPages"] == {"prevPage": "_templates/page", "nextPage": "homelab/network"}


def test_post_tree_invalid_regex_is_400():
    r = client.post(
        "/api/v1/tree",
        json={"currentPage": "home", "config": {"exclusions": [{"type": "regex", "rule": "("}]}},
    )

    assert r.status_code == 400
    assert r.json()["code"] == "bad_exclusion"


def test_post_tree_unknown_function_is_400():
    r = client.post(
        "/api/v1/tree",
        json={"currentPage": "home", "config": {"exclusions": [{"type": "external-predicate", "name": "nope"}]}},
    )

    assert r.status_code == 400
    assert "nope" in r.json()["message"]


def test_upstream_error_is_mapped(monkeypatch):
    async def boom(self):
        raise WikiError(504, "Network error talking to Wiki.js: boom")

    monkeypatch.setattr(WikiJSClient, "list_pages", boom)

    r = client.get("/api/v1/tree", params={"current_page": "home"})
    assert r.status_code == 504
    assert r.json()["code"] == "upstream_error"


def test_tree_text():
    r = client.get("/api/v1/tree/text", params={"current_page": "home"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/plain")
    assert r.text == "\n".join(
        [
            ".",
            "|-- home *",
            "`-- homelab/",
            "    |-- gpu-vm",
            "    `-- network",
        ]
    )


def test_access_log_carries_current_page(caplog):
    with caplog.at_level(logging.INFO, logger="treeview.access"):
        r = client.get(
            "/api/v1/tree",
            params={"current_page": "homelab/gpu-vm"},
            headers={"X-Request-Id": "req-42"},
        )

    assert r.headers["X-Request-Id"] == "req-42"
    entries = [json.loads(rec.getMessage()) for rec in caplog.records if rec.name == "treeview.access"]
    entry = next(e for e in entries if e["req_id"] == "req-42")
    assert entry["path"] == "/api/v1/tree"
    assert entry["status"] == 200
    assert entry["current_page"] == "homelab/gpu-vm"
    assert entry["duration_ms"] >= 0


def test_access_log_for_upstream_failure_is_a_warning(monkeypatch, caplog):
    async def boom(self):
        raise WikiError(502, "Wiki.js GraphQL error: down")

    monkeypatch.setattr(WikiJSClient, "list_pages", boom)

    with caplog.at_level(logging.INFO, logger="treeview.access"):
        r = client.get("/api/v1/tree", headers={"X-Request-Id": "req-502"})

    assert r.status_code == 502
    record = next(rec for rec in caplog.records if rec.name == "treeview.access" and "req-502" in rec.getMessage())
    assert record.levelno == logging.WARNING
    assert "current_page" not in json.loads(record.getMessage())


def test_rejected_api_key_is_logged(monkeypatch, caplog):
    monkeypatch.setenv("TREEVIEW_API_KEY", "secret")

    with caplog.at_level(logging.WARNING, logger="treeview.auth"):
        r = client.get("/api/v1/tree/text", headers={"X-API-Key": "wrong"})

    assert r.status_code == 401
    assert any("wrong API key" in rec.getMessage() for rec in caplog.records if rec.name == "treeview.auth")
