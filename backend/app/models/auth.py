from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z
from .common import new_id

USER_ROLES = ("user", "admin")
LOGIN_METHODS = ("email_password", "external")


class User(db.Model):
    """
    Back-office accounts.

    password_hash is nullable: accounts synchronised from the external
    identity provider never get a local password.
    """
    __tablename__ = "users"

    id = db.Column(db.String(64), primary_key=True, default=new_id)
    name = db.Column(db.Text, nullable=True)
    email = db.Column(db.String(320), nullable=True, unique=True, index=True)

    # Bcrypt hashed password
    password_hash = db.Column(db.String(255), nullable=True)

    login_method = db.Column(db.String(64), nullable=False, default="email_password")
    role = db.Column(db.String(16), nullable=False, default="user")

    # Subject id at the identity provider, when the account came from there
    external_id = db.Column(db.String(255), nullable=True, unique=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    last_signed_in = db.Column(db.DateTime(timezone=True), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def display_name(self) -> str:
        return self.name or self.email or "User"

    def to_dict(self) -> dict:
        # Never include password_hash
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "loginMethod": self.login_method,
            "createdAt": to_utc_z(self.created_at),
            "lastSignedIn": to_utc_z(self.last_signed_in) if self.last_signed_in else None,
        }


class SessionToken(db.Model):
    """
    Opaque session tokens issued on login.

    SECURITY NOTES:
    - Tokens stored hashed in database (SHA-256)
    - Fixed absolute expiry (one year by default)
    - Revoked on logout
    """
    __tablename__ = "session_tokens"
    __table_args__ = (
        db.Index("ix_session_tokens_user_active", "user_id", "is_revoked"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.String(64), db.ForeignKey("users.id"), nullable=False, index=True)

    # Token hash (never store plaintext tokens!)
    token_hash = db.Column(db.String(64), nullable=False, unique=True, index=True)
    display_name = db.Column(db.String(255), nullable=False)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    expires_at = db.Column(db.DateTime(timezone=True), nullable=False, index=True)

    is_revoked = db.Column(db.Boolean, nullable=False, default=False, index=True)
    revoked_at = db.Column(db.DateTime(timezone=True), nullable=True)

    user = db.relationship("User", backref=db.backref("session_tokens", lazy=True))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "userId": self.user_id,
            "displayName": self.display_name,
            "createdAt": to_utc_z(self.created_at),
            "expiresAt": to_utc_z(self.expires_at),
            "isRevoked": self.is_revoked,
        }
