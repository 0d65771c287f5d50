"""Behaviour when the app starts without DATABASE_URL."""

from types import SimpleNamespace

import pytest

from app.extensions import StorageUnavailableError, get_datastore
from app.services import session_service, station_service

from conftest import RpcClient, error_code, make_app, result


@pytest.fixture
def bare_app(tmp_path):
    app = make_app(tmp_path, database_url=None)
    with app.app_context():
        yield app


@pytest.fixture
def rpc(bare_app, monkeypatch):
    # Reads are reachable only by an authenticated caller; stub the session lookup
    caller = SimpleNamespace(id="u-1", role="user", is_admin=False, to_dict=lambda: {"id": "u-1"})
    monkeypatch.setattr(
        session_service,
        "validate_session",
        lambda token: SimpleNamespace(user=caller, session=None) if token else None,
    )
    return RpcClient(bare_app.test_client())


AUTH = {"Authorization": "Bearer any-token"}
MARCH = {"stationId": "s-1", "startDate": "2026-03-01", "endDate": "2026-03-31"}


def test_datastore_reports_not_configured(bare_app):
    store = get_datastore()
    assert store.configured is False
    assert store.ready is False
    with pytest.raises(StorageUnavailableError):
        store.require()


def test_service_reads_degrade_to_empty(bare_app):
    assert station_service.list_stations() == []
    assert station_service.get_station("anything") is None


def test_service_writes_raise(bare_app):
    with pytest.raises(StorageUnavailableError):
        station_service.create_station(name="X", address="A", city="C", state="S", zip_code="1")


def test_rpc_reads_return_empty(rpc):
    assert result(rpc.query("gasStations.list", headers=AUTH)) == []
    assert result(rpc.query("employees.byStation", {"stationId": "s-1"}, headers=AUTH)) == []
    assert result(rpc.query("shifts.active", headers=AUTH)) == []
    assert result(rpc.query("expenses.byDateRange", MARCH, headers=AUTH)) == []
    assert result(rpc.query("fuelInventory.byStation", {"stationId": "s-1"}, headers=AUTH)) == []
    assert result(rpc.query("analytics.revenue", MARCH, headers=AUTH)) == {
        "totalRevenue": 0, "fuelRevenue": 0, "groceryRevenue": 0, "reportCount": 0,
    }
    assert result(rpc.query("analytics.profit", MARCH, headers=AUTH)) == {"revenue": 0, "expenses": 0, "profit": 0}


def test_rpc_get_by_id_is_not_found(rpc):
    assert error_code(rpc.query("gasStations.getById", {"id": "s-1"}, headers=AUTH)) == "NOT_FOUND"


def test_rpc_writes_fail_generically(rpc):
    response = rpc.mutate("gasStations.create", {
        "name": "X", "address": "A", "city": "C", "state": "S", "zipCode": "1",
    }, headers=AUTH)
    assert response.status_code == 500
    assert error_code(response) == "INTERNAL_SERVER_ERROR"


def test_anonymous_caller_without_store(bare_app):
    rpc = RpcClient(bare_app.test_client())
    assert result(rpc.query("auth.me")) is None
    assert rpc.query("gasStations.list").status_code == 401
    assert error_code(rpc.login("someone@example.com", "Password123!")) == "INTERNAL_SERVER_ERROR"


def test_health_reports_not_configured(bare_app):
    response = bare_app.test_client().get("/health")
    assert response.status_code == 200
    assert response.get_json()["database"]["status"] == "not_configured"
