"""
Explicit session state for service calls.

Services never touch ``flask_login`` or ``flash`` directly. They receive a
``SessionContext`` and return a new one; the HTTP layer applies the result with
``commit_context`` once the call has succeeded.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from flask import flash
from flask_login import current_user, login_user, logout_user

from .extensions import db


@dataclass(frozen=True)
class Identity:
    id: int
    email: str

    @classmethod
    def of(cls, landlord) -> "Identity":
        return cls(id=landlord.id, email=landlord.email)


@dataclass(frozen=True)
class SessionContext:
    identity: Optional[Identity] = None
    messages: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None

    def with_message(self, category: str, text: str) -> "SessionContext":
        return replace(self, messages=self.messages + ((category, text),))

    def logged_in(self, identity: Identity) -> "SessionContext":
        return replace(self, identity=identity)

    def logged_out(self) -> "SessionContext":
        return replace(self, identity=None)


def current_context() -> SessionContext:
    """Snapshot of the request's logged-in identity."""
    if current_user.is_authenticated:
        return SessionContext(identity=Identity.of(current_user))
    return SessionContext()


def commit_context(ctx: SessionContext) -> None:
    """Apply a service result to the Flask-Login session and flash queue."""
    from .models import Landlord

    if ctx.identity is None:
        if current_user.is_authenticated:
            logout_user()
    elif not current_user.is_authenticated or current_user.id != ctx.identity.id:
        landlord = db.session.get(Landlord, ctx.identity.id)
        if landlord is not None:
            login_user(landlord)
    for category, text in ctx.messages:
        flash(text, category)


def flash_error(exc) -> None:
    for message in exc.messages():
        flash(message, "errors")
