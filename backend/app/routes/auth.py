# Overview: RPC procedures for auth operations; login, logout and user management.

"""
Authentication procedures

SECURITY FEATURES:
- Unknown email and wrong password produce the same UNAUTHORIZED message
- Session token travels in an HTTP-only, SameSite=Lax cookie
- User creation and listing are admin-only
"""

from flask import current_app

from ..models import USER_ROLES
from ..rpc import ADMIN, PUBLIC, Router
from ..services import auth_service, session_service
from ..validation import Field, RpcError, optional, shape


router = Router("auth")

INVALID_CREDENTIALS = "Invalid email or password"


@router.query("me", access=PUBLIC)
def me(ctx, data):
    """Current user projection, or null when anonymous."""
    return ctx.user.to_dict() if ctx.user else None


@router.mutation(
    "login",
    access=PUBLIC,
    input=shape(
        email=Field("email"),
        password=Field("password", min_length=1, max_length=200),
    ),
)
def login(ctx, data):
    """
    Authenticate and issue a session cookie.

    Returns {"success": true, "user": {...}}; the password hash is never
    part of the projection.
    """
    user = auth_service.authenticate(data["email"], data["password"])
    if not user:
        raise RpcError("UNAUTHORIZED", INVALID_CREDENTIALS)

    _, token = session_service.create_session(user)
    ctx.set_session_cookie(token, max_age=int(session_service.session_ttl().total_seconds()))

    current_app.logger.info("User %s signed in", user.id)
    return {"success": True, "user": user.to_dict()}


@router.mutation("logout", access=PUBLIC)
def logout(ctx, data):
    """Revoke the presented token (if any) and clear the cookie. Always succeeds."""
    if ctx.session_token:
        session_service.revoke_session(ctx.session_token)
    ctx.clear_session_cookie()
    return {"success": True}


@router.mutation(
    "createUser",
    access=ADMIN,
    input=shape(
        email=Field("email", max_length=320),
        password=Field("password", min_length=auth_service.MIN_PASSWORD_LENGTH, max_length=200),
        name=optional("string", max_length=200),
        role=optional("enum", choices=USER_ROLES),
    ),
)
def create_user(ctx, data):
    user = auth_service.create_user(
        email=data["email"],
        password=data["password"],
        name=data.get("name"),
        role=data.get("role"),
    )
    return user.to_dict()


@router.query("listUsers", access=ADMIN)
def list_users(ctx, data):
    return [user.to_dict() for user in auth_service.list_users()]
