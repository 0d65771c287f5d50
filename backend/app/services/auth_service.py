# Overview: Service-layer operations for auth; encapsulates business logic and database work.

"""
Authentication Service

Passwords are hashed with bcrypt. Login tries the external identity
provider first when one is configured, synchronising a local user record
on success, and falls back to local bcrypt verification for accounts
that only exist here.

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Minimum 8 characters required
- Unknown email, missing hash and wrong password all return None so the
  caller cannot tell which one happened
"""

from __future__ import annotations

import bcrypt
from flask import current_app

from ..extensions import db, get_datastore
from ..models import User
from ..validation import ConflictError, ValidationError
from app.time_utils import utcnow
from .identity_service import IdentityProviderError, get_identity_provider
from .provisioning_service import OwnerIdentity, get_owner_identity

MIN_PASSWORD_LENGTH = 8
# bcrypt only reads the first 72 bytes
MAX_PASSWORD_BYTES = 72


class PasswordValidationError(ValidationError):
    """Raised when password doesn't meet strength requirements."""
    pass


def validate_password_strength(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise PasswordValidationError(
            f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes"
        )


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt with cost factor 12.

    Password is validated for strength before hashing.
    """
    validate_password_strength(password)
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str | None) -> bool:
    """
    Verify password against bcrypt hash.

    Returns False for a missing or malformed hash instead of raising.
    """
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def get_user(user_id: str) -> User | None:
    if not get_datastore().ready:
        return None
    return db.session.get(User, user_id)


def get_user_by_email(email: str) -> User | None:
    if not get_datastore().ready:
        return None
    return db.session.query(User).filter(User.email == email.strip().lower()).first()


def list_users() -> list[User]:
    if not get_datastore().ready:
        return []
    return db.session.query(User).order_by(User.created_at.desc(), User.email.asc()).all()


def create_user(
    email: str,
    password: str,
    name: str | None = None,
    role: str | None = None,
) -> User:
    """
    Create a local email/password account.

    Raises:
        ConflictError: email already registered
        PasswordValidationError: password too short
    """
    get_datastore().require()

    email = email.strip().lower()
    if get_user_by_email(email):
        raise ConflictError("A user with this email already exists")

    user = User(
        email=email,
        password_hash=hash_password(password),
        name=name or None,
        role=role or "user",
        login_method="email_password",
    )
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("Created user %s with role %s", user.id, user.role)
    return user


def sync_external_user(
    *,
    external_id: str,
    email: str | None,
    name: str | None,
    owner: OwnerIdentity | None = None,
) -> User:
    """
    Insert or refresh the local record for an identity-provider account.

    New records get role admin only when they match the provisioned owner
    identity; existing records only have last_signed_in (and missing
    profile fields) refreshed, never their role.
    """
    get_datastore().require()
    now = utcnow()
    email = email.strip().lower() if email else None

    user = db.session.query(User).filter(User.external_id == external_id).first()
    if user is None and email:
        # Legacy local account signing in through the provider for the first time
        user = get_user_by_email(email)
        if user is not None:
            user.external_id = external_id

    if user is None:
        role = "admin" if owner is not None and owner.matches(external_id=external_id, email=email) else "user"
        user = User(
            external_id=external_id,
            email=email,
            name=name,
            role=role,
            login_method="external",
            last_signed_in=now,
        )
        db.session.add(user)
        if role == "admin":
            current_app.logger.info("Granted admin to provisioned owner %s", email or external_id)
    else:
        user.last_signed_in = now
        if name and not user.name:
            user.name = name

    db.session.commit()
    return user


def _authenticate_local(email: str, password: str) -> User | None:
    user = get_user_by_email(email)
    if not user:
        return None
    if not user.password_hash:
        return None
    if not verify_password(password, user.password_hash):
        return None

    user.last_signed_in = utcnow()
    db.session.commit()
    return user


def authenticate(email: str, password: str) -> User | None:
    """
    Authenticate with email and password.

    Returns the User on success, None for any credential failure.
    Raises StorageUnavailableError if the data store is not configured.
    """
    get_datastore().require()
    email = email.strip().lower()

    provider = get_identity_provider()
    if provider is not None:
        try:
            identity = provider.sign_in(email, password)
        except IdentityProviderError as exc:
            current_app.logger.info("Identity provider rejected sign-in, trying local account: %s", exc)
        else:
            return sync_external_user(
                external_id=identity.subject,
                email=identity.email or email,
                name=identity.name,
                owner=get_owner_identity(),
            )

    user = _authenticate_local(email, password)
    if user is None:
        current_app.logger.info("Failed login attempt")
    return user
