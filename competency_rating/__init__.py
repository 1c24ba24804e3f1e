import os

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .errors import RatingError
from .extensions import db, login_manager, migrate


def create_app(config_object="config.Config"):
    """App factory. Blueprints are JSON-only; errors render as ``{"message": ...}``."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    from . import models  # noqa: F401  register tables on the metadata

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        return db.session.get(User, int(user_id))

    from .blueprints.auth import bp as auth_bp
    from .blueprints.ratings import bp as ratings_bp
    from .blueprints.rating_logs import bp as rating_logs_bp
    from .blueprints.competencies import bp as competencies_bp
    from .blueprints.reports import bp as reports_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(ratings_bp, url_prefix="/ratings")
    app.register_blueprint(rating_logs_bp, url_prefix="/rating-logs")
    app.register_blueprint(competencies_bp, url_prefix="/competencies")
    app.register_blueprint(reports_bp, url_prefix="/reports")

    @app.errorhandler(RatingError)
    def handle_rating_error(err):
        if err.status_code >= 500:
            app.logger.error("request failed: %s", err.message)
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"message": err.description or err.name}), err.code

    @app.get("/health")
    def health():
        return jsonify({"status": "ok"})

    # Alembic sets SKIP_CREATE_ALL so migrations own the schema
    if app.config.get("AUTO_CREATE_TABLES") and not os.getenv("SKIP_CREATE_ALL"):
        with app.app_context():
            db.create_all()

    return app
