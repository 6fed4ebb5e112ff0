import click
from flask import Flask

from .errors import PartialDeletionError, ValidationError
from .extensions import db
from .models import Landlord
from .services.account import purge_landlord
from .validation import validate_signup


def register_cli(app: Flask) -> None:
    @app.cli.command("create-landlord")
    @click.option("--email", prompt=True)
    @click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
    def create_landlord(email: str, password: str):
        try:
            email = validate_signup(email, password, password)
        except ValidationError as exc:
            for message in exc.messages():
                click.echo(message)
            return
        if Landlord.query.filter_by(email=email).first():
            click.echo("Landlord with that email already exists")
            return
        landlord = Landlord(email=email, apartment_numbers=[])
        landlord.set_password(password)
        db.session.add(landlord)
        db.session.commit()
        click.echo(f"Landlord {email} created")

    @app.cli.command("purge-pending-deletions")
    def purge_pending_deletions():
        """Finish account deletions that were interrupted part way."""
        pending = (
            Landlord.query.filter(Landlord.deletion_requested_at.isnot(None))
            .order_by(Landlord.deletion_requested_at.asc())
            .all()
        )
        if not pending:
            click.echo("No pending deletions")
            return
        failed = 0
        for landlord in pending:
            email = landlord.email
            try:
                purge_landlord(landlord)
            except PartialDeletionError as exc:
                failed += 1
                click.echo(f"Failed to purge {email} at step {exc.step}", err=True)
                continue
            click.echo(f"Purged {email}")
        if failed:
            raise click.exceptions.Exit(1)
