# Overview: Session loading and access decorators for RPC handlers.

from functools import wraps

from flask import current_app, g, request

from .services import session_service
from .validation import RpcError


def _request_token() -> str | None:
    """Session cookie first, then an Authorization: Bearer header."""
    cookie_name = current_app.config.get("APP_SESSION_COOKIE", "app_session_id")
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


def load_session() -> None:
    """
    Resolve the caller for this request.

    Sets the following Flask g attributes:
    - g.current_user: the authenticated User, or None
    - g.session_token: the plaintext token presented by the client, or None
    - g.session_context: the full SessionContext, or None

    Never raises for a bad token; an unknown, revoked or expired token simply
    leaves the caller anonymous.
    """
    token = _request_token()
    context = session_service.validate_session(token)

    g.session_token = token
    g.session_context = context
    g.current_user = context.user if context else None


def require_auth(f):
    """
    Require an authenticated caller.

    Raises RpcError("UNAUTHORIZED") before the wrapped handler runs.
    """
    @wraps(f)
    def decorated_function(ctx, *args, **kwargs):
        if ctx.user is None:
            raise RpcError("UNAUTHORIZED", "Please login to continue")
        return f(ctx, *args, **kwargs)

    return decorated_function


def require_admin(f):
    """
    Require the caller's role to be admin.

    Must be stacked under require_auth.
    """
    @wraps(f)
    def decorated_function(ctx, *args, **kwargs):
        if not ctx.user.is_admin:
            current_app.logger.warning(
                "Admin procedure denied for user %s on %s", ctx.user.id, request.path
            )
            raise RpcError("FORBIDDEN", "Only admins can perform this action")
        return f(ctx, *args, **kwargs)

    return decorated_function
