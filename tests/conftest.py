from datetime import date, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from portal import create_app
from portal.config import TestConfig
from portal.extensions import db
from portal.models import Apartment, ApartmentBooking, Landlord, LinkedAccount
from portal.notifications import NotificationPort


class RecordingNotifier(NotificationPort):
    def __init__(self):
        self.reset_links = []
        self.contact_messages = []

    def send_reset_link(self, email, token):
        self.reset_links.append((email, token))

    def send_contact_message(self, name, email, message):
        self.contact_messages.append((name, email, message))


class FailingApartmentQuery:
    """Stands in for Apartment.query and fails the apartments delete step."""

    def filter_by(self, **kwargs):
        return self

    def delete(self, **kwargs):
        raise OperationalError("DELETE FROM apartments", {}, Exception("disk I/O error"))


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def app(notifier):
    app = create_app(TestConfig, notifier=notifier)
    # No app context is held open across the test: each client request gets
    # its own, so the login cache on `g` never leaks between requests.
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def request_ctx(app):
    with app.test_request_context():
        yield


@pytest.fixture()
def make_landlord(app):
    def _make(email="landlord@rentals.io", password="secret", apartment_numbers=(), providers=()):
        with app.app_context():
            landlord = Landlord(email=email, apartment_numbers=list(apartment_numbers))
            landlord.set_password(password)
            db.session.add(landlord)
            db.session.flush()
            for kind in providers:
                db.session.add(LinkedAccount(landlord_id=landlord.id, kind=kind, access_token=f"{kind}-token"))
            db.session.commit()
            return landlord.id

    return _make


@pytest.fixture()
def make_apartment(app):
    def _make(number, landlord_email="landlord@rentals.io", bookings=0, **fields):
        with app.app_context():
            db.session.add(Apartment(apartment_number=number, landlord_email=landlord_email, **fields))
            for day in range(bookings):
                db.session.add(
                    ApartmentBooking(apartment_number=number, booked_on=date(2026, 7, 1) + timedelta(days=day))
                )
            db.session.commit()
            return number

    return _make


def login(client, email="landlord@rentals.io", password="secret", **kwargs):
    return client.post("/login", data={"email": email, "password": password}, **kwargs)


def flashed(client):
    with client.session_transaction() as sess:
        return list(sess.get("_flashes", []))


def logged_in_id(client):
    with client.session_transaction() as sess:
        return sess.get("_user_id")
