import hashlib
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from .extensions import db


MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)


class Landlord(UserMixin, db.Model, TimestampMixin):
    __tablename__ = "landlords"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    # Both set while a reset is active, both cleared otherwise
    password_reset_token = db.Column(db.String(64), nullable=True, index=True)
    password_reset_expires = db.Column(db.DateTime, nullable=True)

    # Apartment numbers shown on the profile page
    apartment_numbers = db.Column(db.JSON, nullable=True, default=list)

    profile_name = db.Column(db.String(200))
    profile_gender = db.Column(db.String(50))
    profile_location = db.Column(db.String(200))
    profile_website = db.Column(db.String(500))
    profile_picture = db.Column(db.String(500))

    # Set before a cascading delete starts; a row that still carries it was
    # not fully removed and is picked up by `flask purge-pending-deletions`.
    deletion_requested_at = db.Column(db.DateTime, nullable=True)

    linked_accounts = db.relationship(
        "LinkedAccount",
        back_populates="landlord",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def has_active_reset(self) -> bool:
        return bool(self.password_reset_token and self.password_reset_expires)

    @property
    def deletion_pending(self) -> bool:
        return self.deletion_requested_at is not None

    def gravatar(self, size: int = 200) -> str:
        if not self.email:
            return f"https://gravatar.com/avatar/?s={size}&d=retro"
        md5 = hashlib.md5(self.email.encode("utf-8")).hexdigest()
        return f"https://gravatar.com/avatar/{md5}?s={size}&d=retro"

    def __repr__(self) -> str:
        return f"<Landlord {self.email}>"


class LinkedAccount(db.Model, TimestampMixin):
    """Token issued by an external login provider."""

    __tablename__ = "linked_accounts"

    id = db.Column(db.Integer, primary_key=True)
    landlord_id = db.Column(db.Integer, db.ForeignKey("landlords.id"), nullable=False, index=True)
    kind = db.Column(db.String(50), nullable=False)
    access_token = db.Column(db.String(500), nullable=False)

    landlord = db.relationship("Landlord", back_populates="linked_accounts")


class Apartment(db.Model, TimestampMixin):
    __tablename__ = "apartments"

    id = db.Column(db.Integer, primary_key=True)
    apartment_number = db.Column(db.Integer, unique=True, nullable=False, index=True)
    landlord_email = db.Column(db.String(255), nullable=False, index=True)

    num_bedrooms = db.Column(db.Integer, nullable=True)
    num_bathrooms = db.Column(db.Integer, nullable=True)
    photos_folder = db.Column(db.String(500))

    # Price per month only; landlords negotiate specific days themselves
    january_price = db.Column(db.Numeric(12, 2))
    february_price = db.Column(db.Numeric(12, 2))
    march_price = db.Column(db.Numeric(12, 2))
    april_price = db.Column(db.Numeric(12, 2))
    may_price = db.Column(db.Numeric(12, 2))
    june_price = db.Column(db.Numeric(12, 2))
    july_price = db.Column(db.Numeric(12, 2))
    august_price = db.Column(db.Numeric(12, 2))
    september_price = db.Column(db.Numeric(12, 2))
    october_price = db.Column(db.Numeric(12, 2))
    november_price = db.Column(db.Numeric(12, 2))
    december_price = db.Column(db.Numeric(12, 2))

    additional_information = db.Column(db.Text)
    for_sale_price = db.Column(db.Numeric(12, 2), nullable=True)  # 0 or NULL: not for sale

    @property
    def is_for_sale(self) -> bool:
        return bool(self.for_sale_price)

    def monthly_prices(self) -> Dict[str, Optional[Decimal]]:
        return {month: getattr(self, f"{month}_price") for month in MONTHS}


class ApartmentBooking(db.Model, TimestampMixin):
    __tablename__ = "apartment_bookings"

    id = db.Column(db.Integer, primary_key=True)
    apartment_number = db.Column(db.Integer, nullable=False, index=True)
    booked_on = db.Column(db.Date, nullable=False)
