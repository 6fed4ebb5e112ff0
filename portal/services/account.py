import logging
from typing import List

from flask_babel import gettext as _
from sqlalchemy.exc import SQLAlchemyError

from ..errors import PartialDeletionError
from ..extensions import db
from ..models import Apartment, ApartmentBooking, Landlord, LinkedAccount, utcnow
from ..session import SessionContext
from ..validation import validate_new_password

logger = logging.getLogger(__name__)


def _landlord_for(ctx: SessionContext) -> Landlord:
    landlord = db.session.get(Landlord, ctx.identity.id) if ctx.identity else None
    if landlord is None:
        raise LookupError("No landlord bound to this session")
    return landlord


def account_listings(landlord: Landlord) -> List[int]:
    return list(landlord.apartment_numbers or [])


def change_password(ctx: SessionContext, password: str, confirm: str) -> SessionContext:
    validate_new_password(password, confirm)
    landlord = _landlord_for(ctx)
    landlord.set_password(password)
    db.session.commit()
    logger.info("Password changed for %s", landlord.email)
    return ctx.with_message("success", _("Password has been changed."))


def unlink_provider(ctx: SessionContext, provider: str) -> SessionContext:
    landlord = _landlord_for(ctx)
    removed = LinkedAccount.query.filter_by(landlord_id=landlord.id, kind=provider).delete(
        synchronize_session=False
    )
    db.session.commit()
    if removed:
        logger.info("Unlinked %s from %s", provider, landlord.email)
    return ctx.with_message("info", _("%(provider)s account has been unlinked.", provider=provider))


def purge_landlord(landlord: Landlord) -> None:
    """Remove bookings, apartments and the landlord in one transaction.

    Raises PartialDeletionError naming the step that failed; the transaction
    is rolled back so the landlord row keeps its deletion marker.
    """
    email = landlord.email
    step = "enumerate"
    try:
        numbers = [
            number
            for (number,) in db.session.query(Apartment.apartment_number)
            .filter(Apartment.landlord_email == email)
            .all()
        ]

        step = "bookings"
        bookings = 0
        if numbers:
            bookings = ApartmentBooking.query.filter(
                ApartmentBooking.apartment_number.in_(numbers)
            ).delete(synchronize_session=False)
        logger.info("Deleted %d bookings for %s", bookings, email)

        step = "apartments"
        apartments = Apartment.query.filter_by(landlord_email=email).delete(synchronize_session=False)
        logger.info("Deleted %d apartments for %s", apartments, email)

        step = "landlord"
        LinkedAccount.query.filter_by(landlord_id=landlord.id).delete(synchronize_session=False)
        db.session.delete(landlord)
        db.session.commit()
        logger.info("Deleted landlord %s", email)
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Account deletion for %s failed at step %s", email, step)
        raise PartialDeletionError(
            _("Your account could not be deleted right away. The deletion has been queued and will be completed shortly."),
            step=step,
            email=email,
        ) from exc


def delete_account(ctx: SessionContext) -> SessionContext:
    landlord = _landlord_for(ctx)
    landlord.deletion_requested_at = utcnow()
    db.session.commit()

    purge_landlord(landlord)

    return ctx.logged_out().with_message(
        "info", _("Your account has been deleted along with your apartments and their bookings.")
    )
