"""Session cookie issuance, validation and revocation through auth.*."""

from datetime import timedelta

from app.extensions import db
from app.models import SessionToken
from app.services import session_service
from app.time_utils import utcnow

from conftest import PASSWORD, RpcClient, error_code, result


def session_cookie_header(response):
    headers = [h for h in response.headers.getlist("Set-Cookie") if h.startswith("app_session_id=")]
    assert len(headers) == 1
    return headers[0]


def test_login_sets_http_only_cookie(anon, regular_user):
    response = anon.login(regular_user.email)
    data = result(response)

    assert data["success"] is True
    assert data["user"]["email"] == regular_user.email
    assert "passwordHash" not in data["user"]
    assert "password_hash" not in data["user"]

    header = session_cookie_header(response)
    assert "HttpOnly" in header
    assert "SameSite=Lax" in header
    assert "Path=/" in header
    assert f"Max-Age={365 * 24 * 60 * 60}" in header


def test_me_reflects_session(anon, regular_user):
    assert result(anon.query("auth.me")) is None

    result(anon.login(regular_user.email))
    me = result(anon.query("auth.me"))
    assert me["id"] == regular_user.id
    assert me["role"] == "user"


def test_login_failures_share_one_message(anon, regular_user):
    unknown = anon.login("nobody@example.com")
    wrong = anon.login(regular_user.email, "wrong-password")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.get_json() == wrong.get_json()
    assert error_code(unknown) == "UNAUTHORIZED"
    assert "Set-Cookie" not in unknown.headers


def test_logout_revokes_and_clears_cookie(anon, regular_user):
    result(anon.login(regular_user.email))

    response = anon.mutate("auth.logout")
    assert result(response) == {"success": True}
    header = session_cookie_header(response)
    assert "Max-Age=0" in header

    assert result(anon.query("auth.me")) is None
    assert db.session.query(SessionToken).filter_by(is_revoked=True).count() == 1


def test_logout_without_session_still_succeeds(anon):
    assert result(anon.mutate("auth.logout")) == {"success": True}


def test_bearer_header_is_accepted(app, regular_user):
    _, token = session_service.create_session(regular_user)
    rpc = RpcClient(app.test_client())

    me = result(rpc.query("auth.me", headers={"Authorization": f"Bearer {token}"}))
    assert me["id"] == regular_user.id


def test_expired_session_is_rejected(app, regular_user):
    session, token = session_service.create_session(regular_user)
    session.expires_at = utcnow() - timedelta(seconds=1)
    db.session.commit()

    rpc = RpcClient(app.test_client())
    response = rpc.query("gasStations.list", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_unknown_token_is_anonymous(app):
    rpc = RpcClient(app.test_client())
    assert result(rpc.query("auth.me", headers={"Authorization": "Bearer deadbeef"})) is None


def test_token_is_stored_hashed(regular_user):
    session, token = session_service.create_session(regular_user)
    assert session.token_hash != token
    assert session.token_hash == session_service.hash_token(token)
    assert session.display_name == "Clerk"
    assert session_service.validate_session(token).user.id == regular_user.id


def test_session_ttl_follows_config(app, regular_user):
    app.config["SESSION_TTL_DAYS"] = 7
    session, _ = session_service.create_session(regular_user)
    assert abs((session.expires_at - session.created_at) - timedelta(days=7)) < timedelta(seconds=5)
