# backend/app/routes/system.py
"""
System endpoints outside the RPC surface.

- GET /health: database connectivity, with latency
- GET /uploads/<path>: files written by the local storage backend, signed-in callers only
"""

import time

from flask import Blueprint, abort, current_app, g, jsonify, send_from_directory
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..decorators import load_session
from ..extensions import db, get_datastore
from ..services.storage_service import LocalStorage, get_storage

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity.

    Returns dict with status and details.
    """
    if not get_datastore().ready:
        return {"status": "not_configured"}

    start_time = time.time()
    try:
        db.session.execute(text("SELECT 1"))
        elapsed_ms = (time.time() - start_time) * 1000
        return {"status": "healthy", "latency_ms": round(elapsed_ms, 2)}
    except SQLAlchemyError:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error",
        }


@system_bp.get("/health")
def health():
    database = check_database_health()
    ok = database["status"] != "unhealthy"
    return jsonify({
        "status": "ok" if ok else "degraded",
        "database": database,
    }), 200 if ok else 503


@system_bp.get("/uploads/<path:key>")
def uploaded_file(key: str):
    load_session()
    if g.current_user is None:
        return jsonify({"error": {"code": "UNAUTHORIZED", "message": "Please login to continue"}}), 401

    storage = get_storage()
    if not isinstance(storage, LocalStorage):
        abort(404)
    return send_from_directory(storage.root, key)
