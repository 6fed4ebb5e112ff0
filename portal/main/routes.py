from flask import Blueprint, render_template, redirect, url_for, request, flash, current_app
from flask_babel import gettext as _

from ..errors import ValidationError
from ..notifications import get_notifier
from ..session import flash_error
from ..validation import validate_contact


main_bp = Blueprint("main", __name__)


@main_bp.route("/")
def home():
    return render_template("home.html", title=_("Home"))


@main_bp.route("/contact", methods=["GET", "POST"])
def contact():
    if request.method == "POST":
        if not current_app.config.get("CONTACT_FORM_ENABLED"):
            flash(_("The contact form is currently disabled."), "info")
            return redirect(url_for("main.contact"))
        try:
            name, email, message = validate_contact(
                request.form.get("name", ""),
                request.form.get("email", ""),
                request.form.get("message", ""),
            )
        except ValidationError as exc:
            flash_error(exc)
            return redirect(url_for("main.contact"))
        get_notifier().send_contact_message(name, email, message)
        flash(_("Your message has been sent."), "success")
        return redirect(url_for("main.contact"))

    return render_template(
        "contact.html",
        title=_("Contact The Developer"),
        enabled=current_app.config.get("CONTACT_FORM_ENABLED"),
    )
