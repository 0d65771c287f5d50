"""
Pytest fixtures for the gas station back-office tests.

Provides an app bound to an in-memory SQLite database, RPC clients for an
anonymous caller, a regular user and an admin, and a few seeded records.
"""

import json

import pytest

from app import create_app
from app.extensions import db
from app.services import auth_service, employee_service, station_service


PASSWORD = "Password123!"

# Keep developer environment variables out of the test app
BASE_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_TRACK_MODIFICATIONS": False,
    "IDENTITY_PROVIDER_URL": None,
    "IDENTITY_PROVIDER_ANON_KEY": None,
    "OBJECT_STORE_URL": None,
    "OBJECT_STORE_KEY": None,
    "OWNER_EMAIL": None,
    "OWNER_EXTERNAL_ID": None,
    "OWNER_PASSWORD": None,
    "OWNER_NAME": None,
    "SESSION_COOKIE_SECURE": False,
    "APP_SESSION_COOKIE": "app_session_id",
    "SESSION_TTL_DAYS": 365,
    "CORS_ALLOWED_ORIGINS": {"http://localhost:5173"},
}


def make_app(tmp_path, database_url="sqlite:///:memory:", **overrides):
    config = dict(BASE_CONFIG)
    config.update({
        "DATABASE_URL": database_url,
        "SQLALCHEMY_DATABASE_URI": database_url or "sqlite:///:memory:",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
    })
    config.update(overrides)
    return create_app(config)


class RpcClient:
    """Thin wrapper over the Flask test client for /api/trpc calls."""

    def __init__(self, client):
        self.client = client

    def query(self, name, input=None, **kwargs):
        query_string = {"input": json.dumps(input)} if input is not None else None
        return self.client.get(f"/api/trpc/{name}", query_string=query_string, **kwargs)

    def mutate(self, name, input=None, **kwargs):
        return self.client.post(f"/api/trpc/{name}", json=input if input is not None else {}, **kwargs)

    def login(self, email, password=PASSWORD):
        return self.mutate("auth.login", {"email": email, "password": password})


def result(response):
    """Unwrap a successful RPC response."""
    assert response.status_code == 200, response.get_json()
    return response.get_json()["result"]["data"]


def error_code(response):
    return response.get_json()["error"]["code"]


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing."""
    app = make_app(tmp_path)

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def db_session(app):
    return db.session


@pytest.fixture(scope='function')
def anon(app):
    return RpcClient(app.test_client())


@pytest.fixture(scope='function')
def admin_user(db_session):
    return auth_service.create_user("admin@example.com", PASSWORD, name="Admin", role="admin")


@pytest.fixture(scope='function')
def regular_user(db_session):
    return auth_service.create_user("clerk@example.com", PASSWORD, name="Clerk")


@pytest.fixture(scope='function')
def admin_rpc(app, admin_user):
    rpc = RpcClient(app.test_client())
    result(rpc.login(admin_user.email))
    return rpc


@pytest.fixture(scope='function')
def user_rpc(app, regular_user):
    rpc = RpcClient(app.test_client())
    result(rpc.login(regular_user.email))
    return rpc


@pytest.fixture(scope='function')
def station(db_session):
    return station_service.create_station(
        name="Main Street Fuel",
        address="100 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
    )


@pytest.fixture(scope='function')
def other_station(db_session):
    return station_service.create_station(
        name="Highway 9 Stop",
        address="9 Route 9",
        city="Shelbyville",
        state="IL",
        zip_code="62565",
    )


@pytest.fixture(scope='function')
def employee(db_session, station):
    return employee_service.create_employee(
        first_name="Dana",
        last_name="Reyes",
        role="cashier",
        station_ids=[station.id],
        email="dana@example.com",
    )
