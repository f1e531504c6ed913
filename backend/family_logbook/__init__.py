import os
from typing import Any, Dict, Optional
from flask import Flask, send_file, current_app
from flask_swagger_ui import get_swaggerui_blueprint
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .middleware.identity_middleware import identity_middleware
from .errors import register_error_handlers
from .utils.sqlite import serialize_sqlite_transactions

OPENAPI_FILE = "logbook_openapi.yaml"
OPENAPI_URL = "/openapi/logbook.yaml"
SWAGGER_URL = "/swagger"


def create_app(
    config_name: str = "development",
    config_overrides: Optional[Dict[str, Any]] = None,
) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(config_overrides or {})
    app.logger.setLevel(app.config["LOG_LEVEL"])

    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            serialize_sqlite_transactions(db.engine)

    from . import models  # noqa: F401  registers tables on db.metadata

    identity_middleware(app)

    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)
    register_api_docs(app)

    app.logger.debug("Family logbook app created with %s config", config_name)
    return app


def register_api_docs(app: Flask) -> None:
    """Public OpenAPI document plus a Swagger UI pointing at it."""

    @app.route(OPENAPI_URL, methods=["GET"], endpoint="openapi_logbook")
    def serve_openapi():
        path = os.path.join(current_app.root_path, "api", "v1", OPENAPI_FILE)
        if not os.path.exists(path):
            raise FileNotFoundError(f"{OPENAPI_FILE} not found")
        return send_file(path, mimetype="application/yaml")

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        OPENAPI_URL,
        config={
            "app_name": "Family Logbook API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )
    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)
