# Overview: Flask extension instances for database, migrations, and the data store handle.

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()
migrate = Migrate()


class StorageUnavailableError(RuntimeError):
    """Raised when a write is attempted without a configured data store."""


class DataStore:
    """
    Explicit handle on the relational store.

    `configured` is False when the app was started without DATABASE_URL.
    Read paths check `ready` and return empty results; write paths call
    `require()` and fail loudly.
    """

    def __init__(self, app=None):
        self.configured = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.configured = bool(app.config.get("DATABASE_URL"))
        app.extensions["datastore"] = self
        if not self.configured:
            app.logger.warning("DATABASE_URL not set; data store is not configured")

    @property
    def ready(self) -> bool:
        return self.configured

    def require(self) -> None:
        if not self.configured:
            raise StorageUnavailableError("Database not available")


def get_datastore() -> DataStore:
    """Return the data store handle bound to the current app."""
    return current_app.extensions["datastore"]
