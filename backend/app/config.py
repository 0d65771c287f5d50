# backend/app/config.py
from __future__ import annotations
import os


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # No DATABASE_URL means the data store is not configured: reads degrade
    # to empty results and writes raise StorageUnavailableError.
    DATABASE_URL = os.environ.get("DATABASE_URL")
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or "sqlite:///:memory:"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Session cookie issued by auth.login
    APP_SESSION_COOKIE = os.environ.get("APP_SESSION_COOKIE", "app_session_id")
    SESSION_TTL_DAYS = int(os.environ.get("SESSION_TTL_DAYS", "365"))
    SESSION_COOKIE_SECURE = _env_bool("SESSION_COOKIE_SECURE")

    # First-run provisioning of the owner (admin) account
    OWNER_EMAIL = os.environ.get("OWNER_EMAIL")
    OWNER_EXTERNAL_ID = os.environ.get("OWNER_EXTERNAL_ID")
    OWNER_PASSWORD = os.environ.get("OWNER_PASSWORD")
    OWNER_NAME = os.environ.get("OWNER_NAME")

    # Optional external identity provider (password grant)
    IDENTITY_PROVIDER_URL = os.environ.get("IDENTITY_PROVIDER_URL")
    IDENTITY_PROVIDER_ANON_KEY = os.environ.get("IDENTITY_PROVIDER_ANON_KEY")

    # Object store for employee documents; local folder when unset
    OBJECT_STORE_URL = os.environ.get("OBJECT_STORE_URL")
    OBJECT_STORE_KEY = os.environ.get("OBJECT_STORE_KEY")
    OBJECT_STORE_BUCKET = os.environ.get("OBJECT_STORE_BUCKET", "employee-documents")
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER")

    HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))

    CORS_ALLOWED_ORIGINS = {
        origin.strip()
        for origin in os.environ.get(
            "CORS_ALLOWED_ORIGINS",
            "http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    }
