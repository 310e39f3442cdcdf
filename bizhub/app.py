import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from bizhub.config import Config
from bizhub.extension import db, migrate, jwt, ma
from bizhub.routes_controller import register_routes
from bizhub.store import EntityStore
from bizhub.utils.errors import APIError


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    # FLASK_* environment variables override the config object
    app.config.from_prefixed_env()

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    CORS(app,
         supports_credentials=True,
         origins=app.config["CORS_ORIGINS"],
         methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
         allow_headers=["Content-Type", "Authorization"],
         expose_headers=["Authorization"],
         max_age=3600
    )

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    app.extensions["store"] = EntityStore(db)

    if app.config.get("AUTO_MIGRATE"):
        with app.app_context():
            from flask_migrate import upgrade
            upgrade()

    # Register routes
    register_routes(app)
    register_error_handlers(app)
    register_commands(app)

    @app.route('/')
    def home():
        return {"message": "Welcome to bizhub API"}

    return app


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(e):
        return jsonify(e.data), e.code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_error(e):
        app.logger.error(f"Unhandled error: {e}", exc_info=True)
        db.session.rollback()
        message = str(e) if app.debug else "Internal server error"
        return jsonify({"success": False, "message": message}), 500

    # JWT error handlers
    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify({"success": False, "message": "Invalid token", "error": error}), 401

    @jwt.unauthorized_loader
    def missing_token_callback(error):
        return jsonify({"success": False, "message": "Missing authorization token", "error": error}), 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"success": False, "message": "Token has expired"}), 401


def register_commands(app):
    @app.cli.command("seed")
    def seed_command():
        """Create the admin account configured by ADMIN_EMAIL/ADMIN_PASSWORD."""
        from bizhub.seed import seed
        seed()
