from flask import Blueprint, render_template, redirect, url_for, request
from flask_login import login_required, current_user
from flask_babel import gettext as _

from ..errors import DeletionError, ValidationError
from ..models import LinkedAccount
from ..services import account as account_service
from ..session import commit_context, current_context, flash_error


account_bp = Blueprint("account", __name__)


@account_bp.route("")
@login_required
def profile():
    providers = [
        kind
        for (kind,) in LinkedAccount.query.filter_by(landlord_id=current_user.id)
        .with_entities(LinkedAccount.kind)
        .distinct()
        .all()
    ]
    return render_template(
        "account/profile.html",
        title=_("Landlord's Account Page"),
        listings=account_service.account_listings(current_user),
        providers=providers,
    )


@account_bp.route("/password", methods=["POST"])
@login_required
def password():
    try:
        ctx = account_service.change_password(
            current_context(),
            request.form.get("password", ""),
            request.form.get("confirmPassword", ""),
        )
    except ValidationError as exc:
        flash_error(exc)
        return redirect(url_for("account.profile"))
    commit_context(ctx)
    return redirect(url_for("account.profile"))


@account_bp.route("/delete", methods=["POST"])
@login_required
def delete():
    try:
        ctx = account_service.delete_account(current_context())
    except DeletionError as exc:
        # The purge is queued and sign-in is blocked from here on
        commit_context(current_context().logged_out())
        flash_error(exc)
        return redirect(url_for("main.home"))
    commit_context(ctx)
    return redirect(url_for("main.home"))


@account_bp.route("/unlink/<provider>")
@login_required
def unlink(provider: str):
    commit_context(account_service.unlink_provider(current_context(), provider))
    return redirect(url_for("account.profile"))
