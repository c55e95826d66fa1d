import logging

from flask import Flask, jsonify
from flask.logging import default_handler
from werkzeug.exceptions import HTTPException, InternalServerError
from .extensions import db, migrate, login_manager
from .config import Config
from .errors import SmartLedgerError

from .blueprints.auth.routes import auth_bp
from .blueprints.categories.routes import categories_bp
from .blueprints.transactions.routes import transactions_bp
from .blueprints.budgets.routes import budgets_bp
from .blueprints.reports.routes import reports_bp

logger = logging.getLogger(__name__)


def _configure_logging(app):
    logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    if not logger.handlers:
        logger.addHandler(default_handler)


def _register_error_handlers(app):
    @app.errorhandler(SmartLedgerError)
    def handle_app_error(err):
        return jsonify({"message": err.message}), err.status_code

    @app.errorhandler(InternalServerError)
    def handle_server_error(err):
        return jsonify({"message": "Server error"}), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(err):
        return jsonify({"message": err.description}), err.code

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({"message": "Authentication required"}), 401


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)

    # Ensure tables exist for a smooth first run
    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()

    _register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(budgets_bp)
    app.register_blueprint(reports_bp)

    @app.route("/api/health")
    def health():
        return jsonify({"ok": True})

    logger.info("smartledger app created (%s)", config_class.__name__)
    return app
