from typing import List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from flask_babel import gettext as _

from .errors import FieldError, PasswordMismatch, ValidationError

MIN_PASSWORD_LENGTH = 4


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def check_email(email: str, errors: List[FieldError], message: Optional[str] = None) -> str:
    """Append an error unless ``email`` is a well-formed address; return it normalized."""
    normalized = normalize_email(email)
    try:
        validate_email(normalized, check_deliverability=False)
    except EmailNotValidError:
        errors.append(FieldError("email", message or _("Email is not valid")))
    return normalized


def password_errors(password: str, confirm: str) -> List[FieldError]:
    errors = []
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.append(
            FieldError(
                "password",
                _("Password must be at least %(n)d characters long", n=MIN_PASSWORD_LENGTH),
            )
        )
    if password != confirm:
        errors.append(FieldError("confirmPassword", _("Passwords do not match")))
    return errors


def validate_new_password(password: str, confirm: str) -> None:
    """Shared by signup, password change and reset."""
    errors = password_errors(password, confirm)
    if errors:
        raise PasswordMismatch(errors)


def validate_login(email: str, password: str) -> Tuple[str, str]:
    errors: List[FieldError] = []
    normalized = check_email(email, errors)
    if not password:
        errors.append(FieldError("password", _("Password cannot be blank")))
    if errors:
        raise ValidationError(errors)
    return normalized, password


def validate_signup(email: str, password: str, confirm: str) -> str:
    errors: List[FieldError] = []
    normalized = check_email(email, errors)
    if errors:
        errors.extend(password_errors(password, confirm))
        raise ValidationError(errors)
    validate_new_password(password, confirm)
    return normalized


def validate_forgot(email: str) -> str:
    errors: List[FieldError] = []
    normalized = check_email(email, errors, _("Please enter a valid email address."))
    if errors:
        raise ValidationError(errors)
    return normalized


def validate_contact(name: str, email: str, message: str) -> Tuple[str, str, str]:
    errors: List[FieldError] = []
    if not (name or "").strip():
        errors.append(FieldError("name", _("Name cannot be blank")))
    normalized = check_email(email, errors)
    if not (message or "").strip():
        errors.append(FieldError("message", _("Message cannot be blank")))
    if errors:
        raise ValidationError(errors)
    return name.strip(), normalized, message.strip()
