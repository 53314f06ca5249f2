import traceback

from flask import Flask, flash, jsonify, redirect, request, url_for
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException, InternalServerError

from .config import Config
from .errors import Unauthenticated, error_body
from .extensions import db, migrate, login_manager, cors
from .services import CategoryService

from .blueprints import wants_json
from .blueprints.api.health import health_bp
from .blueprints.api.routes import api_bp
from .blueprints.auth.routes import auth_bp
from .blueprints.expenses.routes import expenses_bp
from .cli import register_commands


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    cors.init_app(app, resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}}, supports_credentials=True)

    @login_manager.unauthorized_handler
    def unauthorized():
        if wants_json():
            raise Unauthenticated()
        flash("Please log in first.", "warning")
        return redirect(url_for("auth.login", next=request.path))

    # Ensure tables exist for a smooth first run
    with app.app_context():
        db.create_all()
        if app.config["SEED_CATEGORIES"]:
            try:
                created = CategoryService(db.session).seed_defaults()
                if created:
                    app.logger.info("Seeded %s default categories", created)
            except SQLAlchemyError:
                # Do not block app startup if seeding fails
                db.session.rollback()
                app.logger.exception("Seeding default categories failed")

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(expenses_bp)
    register_commands(app)

    @app.route("/")
    def root():
        return redirect(url_for("expenses.list_expenses"))

    return app


def register_error_handlers(app):
    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        if not wants_json():
            return exc
        response = jsonify(error_body(exc))
        response.status_code = exc.code
        # Keep headers such as Allow on 405
        for key, value in exc.get_headers():
            if key.lower() != "content-type":
                response.headers[key] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc):
        db.session.rollback()
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        if not wants_json():
            return InternalServerError(original_exception=exc)
        body = {"error": "Internal server error"}
        if app.config["EXPOSE_ERROR_TRACE"]:
            body["error"] = str(exc)
            body["trace"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return jsonify(body), 500
