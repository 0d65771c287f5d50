# Overview: Typed procedure registry and the single HTTP endpoint that dispatches to it.

"""
RPC layer.

Procedures are grouped into namespaced routers (`gasStations`, `shifts`, ...)
and called as `<namespace>.<procedure>` on one endpoint:

- queries:    GET  /api/trpc/<name>?input=<url-encoded JSON>
- mutations:  POST /api/trpc/<name>   with a JSON body

Responses:
- success: {"result": {"data": ...}}
- failure: {"error": {"code": "UNAUTHORIZED", "message": "..."}}

Every procedure declares its input Shape and its access level; input is
validated and access enforced before the handler runs, so a rejected call
has no side effect.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

from flask import Blueprint, current_app, g, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from .decorators import load_session, require_admin, require_auth
from .extensions import StorageUnavailableError
from .services.storage_service import StorageError
from .validation import ConflictError, NotFoundError, RpcError, Shape, ValidationError


PUBLIC = "public"
AUTHENTICATED = "authenticated"
ADMIN = "admin"

QUERY = "query"
MUTATION = "mutation"


@dataclass
class RpcContext:
    """Per-call context handed to handlers."""
    user: Any = None
    session_token: str | None = None
    cookies: list[tuple[str, dict]] = field(default_factory=list)

    def set_session_cookie(self, token: str, max_age: int) -> None:
        self.cookies.append(("set", {"value": token, "max_age": max_age}))

    def clear_session_cookie(self) -> None:
        self.cookies.append(("clear", {}))


@dataclass(frozen=True)
class Procedure:
    name: str
    kind: str
    access: str
    input: Shape | None
    handler: Callable[[RpcContext, Any], Any]


class Router:
    """A namespace of procedures."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        self.procedures: dict[str, Procedure] = {}

    def _register(self, kind: str, name: str, input: Shape | None, access: str):
        def decorator(handler):
            def run(ctx: RpcContext, raw: Any):
                data = input.parse(raw) if input is not None else {}
                return handler(ctx, data)

            # Access is checked before input is parsed
            guarded = run
            if access == ADMIN:
                guarded = require_auth(require_admin(run))
            elif access == AUTHENTICATED:
                guarded = require_auth(run)
            full_name = f"{self.namespace}.{name}"
            self.procedures[full_name] = Procedure(full_name, kind, access, input, guarded)
            return handler
        return decorator

    def query(self, name: str, *, input: Shape | None = None, access: str = AUTHENTICATED):
        return self._register(QUERY, name, input, access)

    def mutation(self, name: str, *, input: Shape | None = None, access: str = AUTHENTICATED):
        return self._register(MUTATION, name, input, access)


def register_router(app, router: Router) -> None:
    registry = app.extensions.setdefault("rpc_procedures", {})
    registry.update(router.procedures)


rpc_bp = Blueprint("rpc", __name__, url_prefix="/api/trpc")


def _raw_input(kind: str) -> Any:
    if kind == QUERY:
        raw = request.args.get("input")
        if raw is None or raw == "":
            return None
        try:
            return json.loads(raw)
        except ValueError:
            raise ValidationError("input must be valid JSON")

    if not request.data:
        return None
    data = request.get_json(silent=True)
    if data is None:
        raise ValidationError("Request body must be valid JSON")
    return data


def _error_response(code: str, message: str, status: int | None = None):
    status = status or RpcError.STATUS.get(code, 500)
    return jsonify({"error": {"code": code, "message": message}}), status


def _apply_cookies(response, ctx: RpcContext) -> None:
    cookie_name = current_app.config.get("APP_SESSION_COOKIE", "app_session_id")
    secure = bool(current_app.config.get("SESSION_COOKIE_SECURE"))
    for action, options in ctx.cookies:
        if action == "set":
            response.set_cookie(
                cookie_name,
                options["value"],
                max_age=options["max_age"],
                path="/",
                httponly=True,
                samesite="Lax",
                secure=secure,
            )
        else:
            response.delete_cookie(cookie_name, path="/", httponly=True, samesite="Lax", secure=secure)


@rpc_bp.route("/<path:name>", methods=["GET", "POST"])
def call_procedure(name: str):
    procedure = current_app.extensions.get("rpc_procedures", {}).get(name)
    if procedure is None:
        return _error_response("NOT_FOUND", f'No procedure found on path "{name}"')

    expected_method = "GET" if procedure.kind == QUERY else "POST"
    if request.method != expected_method:
        return _error_response(
            "METHOD_NOT_SUPPORTED",
            f"{procedure.kind.capitalize()} procedures must be called with {expected_method}",
        )

    try:
        load_session()
        ctx = RpcContext(user=g.current_user, session_token=g.session_token)

        raw = _raw_input(procedure.kind)
        result = procedure.handler(ctx, raw)

    except RpcError as exc:
        return _error_response(exc.code, exc.message, exc.status)
    except ValidationError as exc:
        return _error_response("BAD_REQUEST", str(exc))
    except NotFoundError as exc:
        return _error_response("NOT_FOUND", str(exc))
    except ConflictError as exc:
        return _error_response("CONFLICT", str(exc))
    except StorageUnavailableError as exc:
        current_app.logger.error("RPC %s failed: %s", name, exc)
        return _error_response("INTERNAL_SERVER_ERROR", str(exc))
    except StorageError as exc:
        current_app.logger.error("RPC %s storage failure: %s", name, exc)
        return _error_response("INTERNAL_SERVER_ERROR", str(exc))
    except SQLAlchemyError:
        current_app.logger.exception("Database error in RPC %s", name)
        return _error_response("INTERNAL_SERVER_ERROR", "Internal server error")
    except Exception:
        current_app.logger.exception("Unhandled error in RPC %s", name)
        return _error_response("INTERNAL_SERVER_ERROR", "Internal server error")

    response = jsonify({"result": {"data": result}})
    _apply_cookies(response, ctx)
    return response, 200
