# backend/app/__init__.py
from flask import Flask, request

from .config import Config
from .extensions import db, migrate, DataStore


ROUTER_MODULES = (
    "auth",
    "gas_stations",
    "employees",
    "shifts",
    "shift_reports",
    "transactions",
    "expenses",
    "fuel_deliveries",
    "fuel_inventory",
    "analytics",
    "upload",
)


def create_app(config_overrides: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    DataStore(app)

    from .services.identity_service import init_identity_provider
    from .services.storage_service import init_storage
    from .services.provisioning_service import load_owner_identity

    init_identity_provider(app)
    init_storage(app)
    app.extensions["owner_identity"] = load_owner_identity(app.config)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from importlib import import_module
    from .rpc import rpc_bp, register_router
    from .routes.system import system_bp

    app.register_blueprint(rpc_bp)
    app.register_blueprint(system_bp)

    for module_name in ROUTER_MODULES:
        module = import_module(f".routes.{module_name}", __name__)
        register_router(app, module.router)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config.get("CORS_ALLOWED_ORIGINS", set()):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Credentials"] = "true"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
