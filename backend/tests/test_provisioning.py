"""Owner provisioning and the Flask CLI commands."""

import pytest

from app.models import User
from app.services import auth_service
from app.services.provisioning_service import (
    OwnerIdentity,
    ProvisioningError,
    load_owner_identity,
    provision_owner,
)

from conftest import PASSWORD, make_app


class TestOwnerIdentity:
    def test_load_from_config(self):
        identity = load_owner_identity({
            "OWNER_EMAIL": " Owner@Example.com ",
            "OWNER_PASSWORD": PASSWORD,
            "OWNER_NAME": "Owner",
        })
        assert identity == OwnerIdentity(email="owner@example.com", password=PASSWORD, name="Owner")

    def test_nothing_configured(self):
        assert load_owner_identity({"OWNER_PASSWORD": PASSWORD}) is None

    def test_app_carries_identity(self, tmp_path):
        app = make_app(tmp_path, OWNER_EXTERNAL_ID="owner-sub")
        assert app.extensions["owner_identity"].external_id == "owner-sub"


class TestProvisionOwner:
    def test_creates_local_admin(self, db_session):
        user, created = provision_owner(OwnerIdentity(email="owner@example.com", password=PASSWORD, name="Owner"))
        assert created is True
        assert user.role == "admin"
        assert user.login_method == "email_password"
        assert auth_service.authenticate("owner@example.com", PASSWORD).id == user.id

    def test_is_idempotent(self, db_session):
        identity = OwnerIdentity(email="owner@example.com", password=PASSWORD)
        first, _ = provision_owner(identity)
        second, created = provision_owner(identity)
        assert created is False
        assert first.id == second.id
        assert db_session.query(User).count() == 1

    def test_promotes_existing_account(self, regular_user):
        user, created = provision_owner(OwnerIdentity(email=regular_user.email))
        assert created is False
        assert user.id == regular_user.id
        assert user.role == "admin"

    def test_external_owner_without_password(self, db_session):
        user, created = provision_owner(OwnerIdentity(external_id="owner-sub", email="owner@example.com"))
        assert created is True
        assert user.password_hash is None
        assert user.login_method == "external"

    def test_local_owner_needs_password(self, db_session):
        with pytest.raises(ProvisioningError):
            provision_owner(OwnerIdentity(email="owner@example.com"))


class TestCli:
    def test_provision_owner_command(self, app, db_session):
        runner = app.test_cli_runner()
        output = runner.invoke(args=["provision", "owner", "--email", "boss@example.com", "--password", PASSWORD]).output
        assert "PASS Created owner account: boss@example.com" in output

        output = runner.invoke(args=["provision", "owner", "--email", "boss@example.com"]).output
        assert "already present" in output
        assert db_session.query(User).filter_by(email="boss@example.com", role="admin").count() == 1

    def test_provision_owner_uses_configured_identity(self, app, db_session):
        app.extensions["owner_identity"] = OwnerIdentity(email="cfg@example.com", password=PASSWORD)
        output = app.test_cli_runner().invoke(args=["provision", "owner"]).output
        assert "cfg@example.com" in output

    def test_users_create_and_list(self, app, db_session):
        runner = app.test_cli_runner()
        output = runner.invoke(args=[
            "users", "create", "--email", "mgr@example.com", "--password", PASSWORD, "--role", "user",
        ]).output
        assert "PASS Created user: mgr@example.com" in output

        output = runner.invoke(args=["users", "create", "--email", "mgr@example.com", "--password", PASSWORD]).output
        assert "FAIL" in output

        output = runner.invoke(args=["users", "list"]).output
        assert "mgr@example.com" in output

    def test_stations_list(self, app, station):
        output = app.test_cli_runner().invoke(args=["stations", "list"]).output
        assert "Main Street Fuel" in output

    def test_db_init(self, app):
        result = app.test_cli_runner().invoke(args=["db-init"])
        assert result.exit_code == 0
        assert "PASS" in result.output
