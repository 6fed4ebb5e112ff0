from urllib.parse import urlparse

from flask import Blueprint, render_template, redirect, url_for, request, flash, current_app
from flask_login import current_user
from flask_babel import gettext as _

from ..errors import (
    AccountNotFound,
    AuthError,
    PortalError,
    TokenInvalidOrExpired,
    ValidationError,
)
from ..notifications import get_notifier
from ..services import auth as auth_service
from ..services import password_reset
from ..session import commit_context, current_context, flash_error
from ..validation import validate_forgot, validate_login


auth_bp = Blueprint("auth", __name__)


def _safe_next(target: str) -> str:
    # Only same-site relative paths are followed after login
    if target and not urlparse(target).netloc and target.startswith("/") and not target.startswith("//"):
        return target
    return url_for("main.home")


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("main.home"))

    if request.method == "POST":
        try:
            email, password = validate_login(request.form.get("email", ""), request.form.get("password", ""))
            identity = auth_service.authenticate(email, password)
        except (ValidationError, AuthError) as exc:
            flash_error(exc)
            return redirect(url_for("auth.login", next=request.args.get("next")))
        commit_context(auth_service.login(current_context(), identity))
        return redirect(_safe_next(request.args.get("next")))

    return render_template("account/login.html", title=_("Login"))


@auth_bp.route("/logout")
def logout():
    commit_context(auth_service.logout(current_context()))
    return redirect(url_for("main.home"))


@auth_bp.route("/signup", methods=["GET", "POST"])
def signup():
    if current_user.is_authenticated:
        return redirect(url_for("main.home"))

    if request.method == "POST":
        try:
            ctx = auth_service.signup(
                current_context(),
                request.form.get("email", ""),
                request.form.get("password", ""),
                request.form.get("confirmPassword", ""),
            )
        except PortalError as exc:
            flash_error(exc)
            return redirect(url_for("auth.signup"))
        commit_context(ctx)
        return redirect(url_for("main.home"))

    return render_template("account/signup.html", title=_("Create Account"))


@auth_bp.route("/forgot", methods=["GET", "POST"])
def forgot():
    if current_user.is_authenticated:
        return redirect(url_for("main.home"))

    if request.method == "POST":
        try:
            email = validate_forgot(request.form.get("email", ""))
        except ValidationError as exc:
            flash_error(exc)
            return redirect(url_for("auth.forgot"))

        try:
            token = password_reset.request_reset(email)
        except AccountNotFound:
            # Same answer as a delivered link; never reveal which emails exist
            current_app.logger.info("Password reset requested for unknown email %s", email)
            token = None

        if token and current_app.config.get("PASSWORD_RESET_DIRECT_HANDOFF"):
            return redirect(url_for("auth.reset", token=token))
        if token:
            get_notifier().send_reset_link(email, token)
        flash(_("If an account exists for that email, a password reset link has been sent."), "info")
        return redirect(url_for("auth.forgot"))

    return render_template("account/forgot.html", title=_("Forgot Password"))


@auth_bp.route("/reset/<token>", methods=["GET", "POST"])
def reset(token: str):
    if current_user.is_authenticated:
        return redirect(url_for("main.home"))

    if request.method == "POST":
        try:
            ctx = password_reset.redeem_reset(
                current_context(),
                token,
                request.form.get("password", ""),
                request.form.get("confirm", ""),
            )
        except TokenInvalidOrExpired as exc:
            flash_error(exc)
            return redirect(url_for("auth.forgot"))
        except PortalError as exc:
            flash_error(exc)
            return redirect(url_for("auth.reset", token=token))
        commit_context(ctx)
        return redirect(url_for("main.home"))

    if password_reset.find_reset_landlord(token) is None:
        flash(_("Password reset token is invalid or has expired."), "errors")
        return redirect(url_for("auth.forgot"))
    return render_template("account/reset.html", title=_("Password Reset"), token=token)
