import logging
from typing import Optional

from flask import Flask, render_template, request, has_request_context
from sqlalchemy.exc import SQLAlchemyError

from .config import Config, ConfigurationError, require_settings
from .extensions import db, migrate, login_manager, babel
from .notifications import LoggingNotifier, NotificationPort

__all__ = ["create_app", "ConfigurationError", "db"]


def create_app(config_class: type = Config, notifier: Optional[NotificationPort] = None) -> Flask:
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(config_class)

    # Refuse to start without a session secret and a database
    require_settings(app.config)

    configure_logging(app)

    # --- Initialize Extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    babel.init_app(app, locale_selector=select_locale)

    # Login Manager
    login_manager.login_view = "auth.login"
    login_manager.login_message_category = "info"

    app.extensions["notifier"] = notifier or LoggingNotifier(app.logger)

    # --- Import Models after db init ---
    from .models import Landlord  # noqa: WPS433

    @login_manager.user_loader
    def load_user(user_id: str):
        landlord = db.session.get(Landlord, int(user_id))
        if landlord is None or landlord.deletion_pending:
            return None
        return landlord

    # --- Blueprints ---
    from .main.routes import main_bp
    from .auth.routes import auth_bp
    from .account.routes import account_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(account_bp, url_prefix="/account")

    # CLI commands
    from .cli import register_cli
    register_cli(app)

    # --- Error Handlers ---
    @app.errorhandler(403)
    def forbidden(_e):
        return render_template("403.html"), 403

    @app.errorhandler(404)
    def not_found(_e):
        return render_template("404.html"), 404

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        db.session.rollback()
        app.logger.exception("Database failure on %s %s", request.method, request.path)
        return render_template("500.html"), 500

    @app.errorhandler(500)
    def server_error(_e):
        return render_template("500.html"), 500

    return app


def configure_logging(app: Flask) -> None:
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    # app.logger is the package logger, so service modules inherit its level
    app.logger.setLevel(level)


# --- Helper Functions ---
def select_locale():
    """Return the best match from Accept-Language, or the default outside a request."""
    if not has_request_context():
        return None
    return request.accept_languages.best_match(Config.LANGUAGES.keys())
