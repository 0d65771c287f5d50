# Overview: First-run provisioning of the owner (admin) account.

"""
Owner provisioning.

The owner identity is read once from configuration into an OwnerIdentity
and kept on the app. It is used in two places only:
- `provision_owner` (CLI) creates or promotes the owner account to admin
- external-provider sign-in grants admin when it creates the owner's record
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app

from ..extensions import db, get_datastore
from ..models import User


class ProvisioningError(Exception):
    """Raised when the owner account cannot be provisioned."""
    pass


@dataclass(frozen=True)
class OwnerIdentity:
    email: str | None = None
    external_id: str | None = None
    password: str | None = None
    name: str | None = None

    def matches(self, *, external_id: str | None = None, email: str | None = None) -> bool:
        if self.external_id and external_id and self.external_id == external_id:
            return True
        if self.email and email and self.email == email.strip().lower():
            return True
        return False


def load_owner_identity(config) -> OwnerIdentity | None:
    """Build the owner identity from app config; None when nothing is configured."""
    email = config.get("OWNER_EMAIL")
    external_id = config.get("OWNER_EXTERNAL_ID")
    if not email and not external_id:
        return None
    return OwnerIdentity(
        email=email.strip().lower() if email else None,
        external_id=external_id or None,
        password=config.get("OWNER_PASSWORD") or None,
        name=config.get("OWNER_NAME") or None,
    )


def get_owner_identity() -> OwnerIdentity | None:
    return current_app.extensions.get("owner_identity")


def provision_owner(identity: OwnerIdentity) -> tuple[User, bool]:
    """
    Ensure the owner account exists with role admin.

    Returns (user, created). Idempotent: an existing owner account is
    promoted if needed and otherwise left alone.
    """
    from .auth_service import hash_password

    get_datastore().require()

    user = None
    if identity.external_id:
        user = db.session.query(User).filter(User.external_id == identity.external_id).first()
    if user is None and identity.email:
        user = db.session.query(User).filter(User.email == identity.email).first()

    if user is not None:
        if user.role != "admin":
            user.role = "admin"
            db.session.commit()
            current_app.logger.info("Promoted owner %s to admin", user.id)
        return user, False

    if not identity.email and not identity.external_id:
        raise ProvisioningError("Owner email or external id is required")
    if identity.password is None and not identity.external_id:
        raise ProvisioningError("Owner password is required for a local account")

    user = User(
        email=identity.email,
        external_id=identity.external_id,
        name=identity.name,
        role="admin",
        password_hash=hash_password(identity.password) if identity.password else None,
        login_method="email_password" if identity.password else "external",
    )
    db.session.add(user)
    db.session.commit()
    current_app.logger.info("Provisioned owner account %s", user.id)
    return user, True
