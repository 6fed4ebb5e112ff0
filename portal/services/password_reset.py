"""
Token based password reset.

A reset moves a landlord from "no active reset" to "token issued" and back.
An expired token is indistinguishable from no token: every lookup filters on
the token and its expiry in the same statement.
"""
import logging
import secrets
from datetime import datetime
from typing import Optional

from flask import current_app
from flask_babel import gettext as _
from sqlalchemy import update
from werkzeug.security import generate_password_hash

from ..errors import AccountNotFound, TokenInvalidOrExpired
from ..extensions import db
from ..models import Landlord, utcnow
from ..session import Identity, SessionContext
from ..validation import normalize_email, validate_new_password

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16


def generate_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def request_reset(email: str, now: Optional[datetime] = None) -> str:
    now = now or utcnow()
    token = generate_token()

    landlord = Landlord.query.filter_by(email=normalize_email(email)).first()
    if not landlord or landlord.deletion_pending:
        raise AccountNotFound(_("Account with that email address does not exist."))

    landlord.password_reset_token = token
    landlord.password_reset_expires = now + current_app.config["PASSWORD_RESET_TTL"]
    db.session.commit()
    logger.info("Issued password reset token for %s", landlord.email)
    return token


def find_reset_landlord(token: str, now: Optional[datetime] = None) -> Optional[Landlord]:
    if not token:
        return None
    now = now or utcnow()
    return (
        Landlord.query.filter(
            Landlord.password_reset_token == token,
            Landlord.password_reset_expires > now,
        )
        .first()
    )


def redeem_reset(
    ctx: SessionContext,
    token: str,
    password: str,
    confirm: str,
    now: Optional[datetime] = None,
) -> SessionContext:
    validate_new_password(password, confirm)
    now = now or utcnow()

    landlord = find_reset_landlord(token, now)
    if landlord is None:
        raise TokenInvalidOrExpired(_("Password reset token is invalid or has expired."))

    # The conditional UPDATE is the single check that consumes the token; of
    # two concurrent redemptions only one can match.
    result = db.session.execute(
        update(Landlord)
        .where(
            Landlord.id == landlord.id,
            Landlord.password_reset_token == token,
            Landlord.password_reset_expires > now,
        )
        .values(
            password_hash=generate_password_hash(password),
            password_reset_token=None,
            password_reset_expires=None,
            updated_at=now,
        )
        .execution_options(synchronize_session="fetch")
    )
    if result.rowcount != 1:
        db.session.rollback()
        raise TokenInvalidOrExpired(_("Password reset token is invalid or has expired."))
    db.session.commit()

    logger.info("Password reset completed for %s", landlord.email)
    return (
        ctx.logged_in(Identity(id=landlord.id, email=landlord.email))
        .with_message("success", _("Success! Your password has been changed."))
    )
