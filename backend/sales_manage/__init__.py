# backend/sales_manage/__init__.py
import os

from flask import Flask, abort, request, send_from_directory

from .config import Config
from .extensions import db, migrate



def create_app(config_object=Config) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.tax_rates import tax_rates_bp
    from .routes.locations import locations_bp
    from .routes.dropdown import dropdown_bp
    from .routes.staff import staff_bp
    from .routes.customers import customers_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(tax_rates_bp)
    app.register_blueprint(locations_bp)
    app.register_blueprint(dropdown_bp)
    app.register_blueprint(staff_bp)
    app.register_blueprint(customers_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config.get("CORS_ALLOWED_ORIGINS", set()):
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
        return response

    if app.config.get("APP_ENV") == "production":
        register_spa(app)

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app


def register_spa(app: Flask) -> None:
    """Serve the built single-page app; unknown paths fall back to index.html."""
    static_dir = app.config["STATIC_DIR"]

    @app.get("/", defaults={"path": ""})
    @app.get("/<path:path>")
    def spa_route(path: str):
        if path.startswith("api/"):
            abort(404)
        if path and os.path.isfile(os.path.join(static_dir, path)):
            return send_from_directory(static_dir, path)
        return send_from_directory(static_dir, "index.html")
