# Overview: Service-layer operations for session; encapsulates business logic and database work.

"""
Session Token Management Service

Opaque bearer tokens bound to a user id and display name, with a fixed
absolute expiry (one year by default). The plaintext token only ever
lives in the client's cookie; the database stores its SHA-256 hash.
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import timedelta

from flask import current_app

from ..extensions import db, get_datastore
from ..models import SessionToken, User
from app.time_utils import as_utc_naive, utcnow


DEFAULT_SESSION_TTL = timedelta(days=365)


@dataclass
class SessionContext:
    user: User
    session: SessionToken


def session_ttl() -> timedelta:
    days = current_app.config.get("SESSION_TTL_DAYS")
    return timedelta(days=days) if days else DEFAULT_SESSION_TTL


def generate_token() -> str:
    """64-character hex string (32 bytes of entropy)."""
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    """
    Hash token for database storage using SHA-256.

    Tokens are already high-entropy, so a fast hash is sufficient.
    """
    return hashlib.sha256(token.encode('utf-8')).hexdigest()


def create_session(user: User) -> tuple[SessionToken, str]:
    """
    Create new session token for user.

    Returns (session_record, plaintext_token).
    """
    get_datastore().require()

    plaintext_token = generate_token()
    now = utcnow()

    session = SessionToken(
        user_id=user.id,
        token_hash=hash_token(plaintext_token),
        display_name=user.display_name,
        created_at=now,
        expires_at=now + session_ttl(),
        is_revoked=False,
    )
    db.session.add(session)
    db.session.commit()

    return session, plaintext_token


def validate_session(token: str | None) -> SessionContext | None:
    """
    Return the SessionContext for a live token, None otherwise.

    None for: missing token, unknown hash, revoked, expired, or data store
    not configured.
    """
    if not token or not get_datastore().ready:
        return None

    session = db.session.query(SessionToken).filter_by(
        token_hash=hash_token(token),
        is_revoked=False,
    ).first()
    if not session:
        return None

    if as_utc_naive(session.expires_at) < utcnow():
        return None

    user = session.user
    if not user:
        return None

    return SessionContext(user=user, session=session)


def revoke_session(token: str | None) -> bool:
    """
    Revoke session token.

    Returns True if a live session was revoked, False otherwise.
    """
    if not token or not get_datastore().ready:
        return False

    session = db.session.query(SessionToken).filter_by(
        token_hash=hash_token(token),
        is_revoked=False,
    ).first()
    if not session:
        return False

    session.is_revoked = True
    session.revoked_at = utcnow()
    db.session.commit()
    return True
