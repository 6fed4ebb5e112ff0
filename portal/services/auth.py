import logging

from flask_babel import gettext as _
from sqlalchemy.exc import IntegrityError

from ..errors import AccountPendingDeletion, EmailTaken, InvalidCredentials
from ..extensions import db
from ..models import Landlord
from ..session import Identity, SessionContext
from ..validation import normalize_email, validate_signup

logger = logging.getLogger(__name__)


def authenticate(email: str, password: str) -> Identity:
    landlord = Landlord.query.filter_by(email=normalize_email(email)).first()
    if not landlord or not landlord.check_password(password):
        logger.info("Failed login for %s", normalize_email(email))
        raise InvalidCredentials(_("Invalid email or password."))
    if landlord.deletion_pending:
        raise AccountPendingDeletion(_("This account is scheduled for deletion."))
    return Identity.of(landlord)


def login(ctx: SessionContext, identity: Identity) -> SessionContext:
    return ctx.logged_in(identity).with_message("success", _("Success! You are logged in."))


def logout(ctx: SessionContext) -> SessionContext:
    return ctx.logged_out()


def signup(ctx: SessionContext, email: str, password: str, confirm_password: str) -> SessionContext:
    email = validate_signup(email, password, confirm_password)

    if Landlord.query.filter_by(email=email).first():
        raise EmailTaken(
            _("Account with that email address already exists. If that email is yours, try signing in.")
        )

    landlord = Landlord(email=email, apartment_numbers=[])
    landlord.set_password(password)
    db.session.add(landlord)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with a concurrent signup for the same address
        db.session.rollback()
        raise EmailTaken(
            _("Account with that email address already exists. If that email is yours, try signing in.")
        )
    logger.info("Landlord %s signed up", email)
    return ctx.logged_in(Identity.of(landlord))
