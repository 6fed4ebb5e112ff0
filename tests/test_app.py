import logging

import pytest

from conftest import flashed
from portal import ConfigurationError, create_app
from portal.config import TestConfig
from portal.extensions import db
from portal.models import Apartment, ApartmentBooking, Landlord, utcnow
from portal.notifications import LoggingNotifier


class MissingSecretConfig(TestConfig):
    SECRET_KEY = None


class MissingDatabaseConfig(TestConfig):
    SQLALCHEMY_DATABASE_URI = ""


@pytest.mark.parametrize(
    "config_class, variable",
    [(MissingSecretConfig, "SESSION_SECRET"), (MissingDatabaseConfig, "DATABASE_URL")],
)
def test_refuses_to_start_without_required_settings(config_class, variable):
    with pytest.raises(ConfigurationError, match=variable):
        create_app(config_class)


def test_default_notifier_is_logging(app):
    app_without_notifier = create_app(TestConfig)
    assert isinstance(app_without_notifier.extensions["notifier"], LoggingNotifier)


def test_logging_notifier_keeps_token_out_of_log(caplog):
    app = create_app(TestConfig)
    with app.test_request_context():
        with caplog.at_level(logging.DEBUG, logger="portal"):
            LoggingNotifier(app.logger).send_reset_link("owner@rentals.io", "abc123")

    assert "owner@rentals.io" in caplog.text
    assert "abc123" not in caplog.text
    assert any(r.levelno == logging.WARNING and "owner@rentals.io" in r.getMessage() for r in caplog.records)


def test_home_and_contact_pages(client):
    assert client.get("/").status_code == 200
    response = client.get("/contact")
    assert response.status_code == 200
    assert b"currently disabled" in response.data


def test_contact_submission_disabled_by_default(client, notifier):
    response = client.post("/contact", data={"name": "Ann", "email": "ann@rentals.io", "message": "Hi"})

    assert response.headers["Location"].endswith("/contact")
    assert flashed(client) == [("info", "The contact form is currently disabled.")]
    assert notifier.contact_messages == []


def test_contact_submission_when_enabled(client, app, notifier):
    app.config["CONTACT_FORM_ENABLED"] = True

    client.post("/contact", data={"name": "Ann", "email": "Ann@Rentals.io", "message": " Hello "})

    assert notifier.contact_messages == [("Ann", "ann@rentals.io", "Hello")]
    assert flashed(client) == [("success", "Your message has been sent.")]


def test_contact_submission_validation(client, app, notifier):
    app.config["CONTACT_FORM_ENABLED"] = True

    client.post("/contact", data={"name": "", "email": "ann", "message": ""})

    assert [message for _c, message in flashed(client)] == [
        "Name cannot be blank",
        "Email is not valid",
        "Message cannot be blank",
    ]
    assert notifier.contact_messages == []


def test_unknown_page_renders_404(client):
    response = client.get("/no-such-page")
    assert response.status_code == 404
    assert b"Page not found." in response.data


def test_apartment_helpers(app, make_apartment):
    make_apartment(9, january_price=1200, december_price=1500, for_sale_price=0)
    with app.app_context():
        apartment = Apartment.query.filter_by(apartment_number=9).one()
        prices = apartment.monthly_prices()
        assert list(prices)[0] == "january"
        assert prices["january"] == 1200
        assert prices["june"] is None
        assert not apartment.is_for_sale


def test_gravatar(app, make_landlord):
    landlord_id = make_landlord(email="owner@rentals.io")
    with app.app_context():
        landlord = db.session.get(Landlord, landlord_id)
        assert landlord.gravatar(50).startswith("https://gravatar.com/avatar/")
        assert landlord.gravatar(50).endswith("?s=50&d=retro")
        assert Landlord(email="").gravatar() == "https://gravatar.com/avatar/?s=200&d=retro"


def test_cli_create_landlord(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["create-landlord", "--email", "Cli@Rentals.io", "--password", "abcd"])

    assert "Landlord cli@rentals.io created" in result.output
    with app.app_context():
        assert Landlord.query.filter_by(email="cli@rentals.io").one().check_password("abcd")

    result = runner.invoke(args=["create-landlord", "--email", "cli@rentals.io", "--password", "abcd"])
    assert "already exists" in result.output


def test_cli_create_landlord_rejects_short_password(app):
    result = app.test_cli_runner().invoke(args=["create-landlord", "--email", "cli@rentals.io", "--password", "abc"])

    assert "at least 4 characters" in result.output
    with app.app_context():
        assert Landlord.query.count() == 0


def test_cli_purge_pending_deletions(app, make_landlord, make_apartment):
    pending_id = make_landlord(email="gone@rentals.io")
    make_apartment(31, landlord_email="gone@rentals.io", bookings=2)
    make_landlord(email="stays@rentals.io")
    with app.app_context():
        db.session.get(Landlord, pending_id).deletion_requested_at = utcnow()
        db.session.commit()

    result = app.test_cli_runner().invoke(args=["purge-pending-deletions"])

    assert result.exit_code == 0
    assert "Purged gone@rentals.io" in result.output
    with app.app_context():
        assert [l.email for l in Landlord.query.all()] == ["stays@rentals.io"]
        assert Apartment.query.count() == 0
        assert ApartmentBooking.query.count() == 0

    result = app.test_cli_runner().invoke(args=["purge-pending-deletions"])
    assert "No pending deletions" in result.output
