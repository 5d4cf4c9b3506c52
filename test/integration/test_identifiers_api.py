import pytest
from fastapi.testclient import TestClient

from idservice.core.config import settings
from idservice.core.exceptions import StoreQueryError
from idservice.core.partitions import ComponentKind
from idservice.infrastructure.adapters import InMemoryComponentSearch
from idservice.presentation.api.v1.dependencies.identifiers import get_store_search
from idservice.presentation.main import create_application
from utils.sctid_utils import synthesize
from utils.verhoeff import is_valid


@pytest.fixture
def store():
    return InMemoryComponentSearch()


@pytest.fixture
def client(store):
    app = create_application()
    app.dependency_overrides[get_store_search] = lambda: store
    return TestClient(app)


@pytest.mark.integration
def test_reserve_returns_requested_number_of_valid_ids(client, store):
    resp = client.post(
        "/api/v1/identifiers/reserve",
        json={"namespace_id": 0, "partition_id": "00", "quantity": 5},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["namespace_id"] == 0
    assert body["partition_id"] == "00"
    assert len(set(body["ids"])) == 5
    assert all(is_valid(sctid) for sctid in body["ids"])
    assert store.queries[0][:2] == (ComponentKind.CONCEPT, "conceptId")


@pytest.mark.integration
@pytest.mark.parametrize(
    "payload",
    [
        {"namespace_id": 0, "partition_id": "00", "quantity": 0},
        {"namespace_id": -1, "partition_id": "00", "quantity": 1},
        {"namespace_id": 0, "partition_id": "abc", "quantity": 1},
        {"namespace_id": 0, "quantity": 1},
    ],
)
def test_reserve_rejects_invalid_payloads(client, payload):
    resp = client.post("/api/v1/identifiers/reserve", json=payload)
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "Validation error"


@pytest.mark.integration
def test_reserve_caps_quantity(client, monkeypatch):
    monkeypatch.setattr(settings, "max_reserve_quantity", 3, raising=False)
    resp = client.post(
        "/api/v1/identifiers/reserve",
        json={"namespace_id": 0, "partition_id": "00", "quantity": 4},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["error_code"] == "INVALID_REQUEST"


@pytest.mark.integration
def test_strict_mode_rejects_unknown_partition(client, monkeypatch):
    monkeypatch.setattr(settings, "strict_partition_check", True, raising=False)
    resp = client.post(
        "/api/v1/identifiers/reserve",
        json={"namespace_id": 0, "partition_id": "99", "quantity": 1},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["error_code"] == "UNRECOGNIZED_PARTITION"


@pytest.mark.integration
def test_store_failure_maps_to_503(client, store, monkeypatch):
    def boom(*_args, **_kwargs):
        raise StoreQueryError("connection refused", index="concept")

    monkeypatch.setattr(store, "find_identifiers", boom)
    resp = client.post(
        "/api/v1/identifiers/reserve",
        json={"namespace_id": 0, "partition_id": "00", "quantity": 1},
    )
    assert resp.status_code == 503
    assert resp.json()["detail"]["error_code"] == "STORE_QUERY_ERROR"


@pytest.mark.integration
def test_register_is_accepted_and_ignored(client, store):
    resp = client.post("/api/v1/identifiers/register", json={"namespace": 0, "ids": [1, 2]})
    assert resp.status_code == 204
    assert store.queries == []


@pytest.mark.integration
def test_validate_identifier(client):
    sctid = synthesize("12345678", 1000154, "10")
    resp = client.get(f"/api/v1/identifiers/{sctid}/validate")
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["namespace_id"] == 1000154
    assert body["partition_id"] == "10"
    assert body["item_id"] == "12345678"

    bad = client.get("/api/v1/identifiers/138875006/validate")
    assert bad.status_code == 200
    assert bad.json()["valid"] is False

    too_short = client.get("/api/v1/identifiers/12/validate")
    assert too_short.status_code == 400


@pytest.mark.integration
def test_health_reports_store_reachability(client):
    resp = client.get("/api/v1/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["store_reachable"] is True
    assert body["status"] in {"healthy", "warning"}

    root = client.get("/api/v1/")
    assert root.json()["status"] == "healthy"
