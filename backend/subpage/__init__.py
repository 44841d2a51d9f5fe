from flask import Flask, send_file, current_app
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .errors import register_error_handlers
from .domain.registry import SubpageRegistry
from .host.formats import register_builtin_formats
from .application.subpage.delete_instance import delete_subpage_instance
from flask_swagger_ui import get_swaggerui_blueprint
import os


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # -------------------------------------------------
    # Module deletion handlers & section naming
    # -------------------------------------------------
    registry = SubpageRegistry.from_config(app.config)
    if "subpage" not in registry.modules:
        registry.modules.register("subpage", delete_subpage_instance)
    register_builtin_formats(registry.naming)
    app.extensions["subpage"] = registry

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    register_error_handlers(app)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/subpage.yaml", methods=["GET"], endpoint="openapi_subpage")
    def serve_openapi():
        spec_path = os.path.join(
            current_app.root_path,
            "api",
            "v1",
            "subpage_openapi.yaml",
        )

        if not os.path.exists(spec_path):
            raise FileNotFoundError("subpage_openapi.yaml not found")

        return send_file(
            spec_path,
            mimetype="application/yaml",
            as_attachment=False,
        )

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/subpage.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Subpage API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
