from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from bundle_viewer.api.main import create_app
from bundle_viewer.config import ViewerConfig
from bundle_viewer.store.document_store import DocumentStore

DOCUMENT = {
    "/v1/group": {
        "groups": [
            {"name": "g1", "domain": "prod", "policy_mode": "Monitor"},
            {"name": "_sys", "domain": "prod"},
        ]
    },
    "/v1/scan/platform": {"platforms": "Kubernetes"},
    "/v1/host": {"hosts": [{"name": "node-a", "state": "connected", "os": "Linux", "platform": "k8s", "containers": 4}]},
    "/v1/system/summary": {"summary": {"hosts": 1}},
    "controller_log": "line1\nline2",
}


@pytest.fixture
def frontend(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text("<h1>viewer</h1>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def client(frontend: Path) -> TestClient:
    app = create_app(DocumentStore(DOCUMENT), ViewerConfig(frontend_dir=str(frontend)))
    return TestClient(app)


def test_keys_listing_and_filter(client: TestClient) -> None:
    resp = client.get("/api/keys")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")
    assert set(resp.json()) == set(DOCUMENT)

    filtered = client.get("/api/keys", params={"q": "V1/H"})
    assert filtered.json() == ["/v1/host"]


def test_group_view_scenario(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fgroup?domain=prod")
    assert resp.status_code == 200
    assert resp.json() == [{"name": "g1", "domain": "prod", "policy_mode": "Monitor"}]


def test_first_query_value_wins(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fgroup?policy_mode=monitor&policy_mode=protect")
    assert [group["name"] for group in resp.json()] == ["g1"]


def test_raw_values_pass_through(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fsystem%2Fsummary", params={"domain": "x"})
    assert resp.status_code == 200
    assert resp.json() == {"summary": {"hosts": 1}}

    log = client.get("/api/data/controller_log")
    assert log.json() == "line1\nline2"


def test_host_view(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fhost")
    assert resp.json() == [
        {"name": "node-a", "state": "connected", "os": "Linux", "platform": "k8s", "containers": 4}
    ]


def test_missing_key_is_404(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fnope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Key '/v1/nope' not found."}


def test_other_escapes_are_not_decoded(client: TestClient) -> None:
    resp = client.get("/api/data/controller%5Flog")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Key 'controller%5Flog' not found."}


def test_malformed_platform_value_is_500(client: TestClient) -> None:
    resp = client.get("/api/data/%2Fv1%2Fscan%2Fplatform")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process platform data."}


def test_unloaded_store_is_500(frontend: Path) -> None:
    client = TestClient(create_app(DocumentStore(), ViewerConfig(frontend_dir=str(frontend))))

    for path in ("/api/keys", "/api/data/%2Fv1%2Fgroup"):
        resp = client.get(path)
        assert resp.status_code == 500
        assert resp.json() == {"error": "Data not loaded."}

    health = client.get("/api/health")
    assert health.json() == {"status": "ok", "loaded": False, "key_count": 0}


def test_health_and_static_assets(client: TestClient) -> None:
    health = client.get("/api/health")
    assert health.json() == {"status": "ok", "loaded": True, "key_count": len(DOCUMENT)}

    index = client.get("/")
    assert index.status_code == 200
    assert "viewer" in index.text


def test_missing_frontend_dir_disables_static(tmp_path: Path) -> None:
    config = ViewerConfig(frontend_dir=str(tmp_path / "absent"))
    client = TestClient(create_app(DocumentStore(DOCUMENT), config))

    assert client.get("/").status_code == 404
    assert client.get("/api/keys").status_code == 200
