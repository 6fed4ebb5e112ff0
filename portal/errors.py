from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class PortalError(Exception):
    """Base class for failures that are reported back to the user."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def messages(self) -> List[str]:
        return [self.message] if self.message else []


class ValidationError(PortalError):
    """One or more form fields failed validation."""

    def __init__(self, errors: List[FieldError]) -> None:
        super().__init__("; ".join(e.message for e in errors))
        self.errors = list(errors)

    def messages(self) -> List[str]:
        return [e.message for e in self.errors]


class AuthError(PortalError):
    pass


class InvalidCredentials(AuthError):
    pass


class AccountPendingDeletion(AuthError):
    """The landlord has a deletion in progress and can no longer sign in."""


class SignupError(PortalError):
    pass


class EmailTaken(SignupError):
    pass


class ResetError(PortalError):
    pass


class TokenInvalidOrExpired(ResetError):
    pass


class AccountNotFound(ResetError):
    pass


class PasswordMismatch(ValidationError, ResetError):
    """New password too short or not equal to its confirmation."""


class DeletionError(PortalError):
    pass


class PartialDeletionError(DeletionError):
    """A cascade step failed; the landlord keeps its deletion marker."""

    def __init__(self, message: str, step: str, email: Optional[str] = None) -> None:
        super().__init__(message)
        self.step = step
        self.email = email
