import os
from datetime import timedelta

from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))

# Values from a local .env file never override the real environment
load_dotenv(os.path.join(basedir, "..", ".env"))


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing at startup."""


class Config:
    # Session signing secret - REQUIRED
    SECRET_KEY = os.getenv("SESSION_SECRET")

    # Database connection - REQUIRED
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- Password reset ---
    PASSWORD_RESET_TTL = timedelta(hours=1)
    # Legacy hand-off: send the requester straight to /reset/<token> instead
    # of delivering the link through the notifier. Skips proof of e-mail
    # ownership, so it stays off unless explicitly enabled.
    PASSWORD_RESET_DIRECT_HANDOFF = os.getenv("PASSWORD_RESET_DIRECT_HANDOFF", "false").lower() == "true"

    # --- Contact form ---
    CONTACT_FORM_ENABLED = os.getenv("CONTACT_FORM_ENABLED", "false").lower() == "true"
    CONTACT_RECIPIENT = os.getenv("CONTACT_RECIPIENT", "owner@example.com")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # i18n
    LANGUAGES = {"en": "English"}
    BABEL_DEFAULT_LOCALE = "en"
    BABEL_DEFAULT_TIMEZONE = "UTC"

    REQUIRED_SETTINGS = (
        ("SECRET_KEY", "SESSION_SECRET"),
        ("SQLALCHEMY_DATABASE_URI", "DATABASE_URL"),
    )


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    PASSWORD_RESET_DIRECT_HANDOFF = False
    CONTACT_FORM_ENABLED = False
    LOG_LEVEL = "DEBUG"


def require_settings(config) -> None:
    """Fail fast when a required setting is absent."""
    missing = [env for key, env in config.get("REQUIRED_SETTINGS", ()) if not config.get(key)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variable(s): %s" % ", ".join(missing)
        )
