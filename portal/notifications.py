import logging
from abc import ABC, abstractmethod
from typing import Optional

from flask import current_app


class NotificationPort(ABC):
    """Outbound messages the portal needs delivered to people."""

    @abstractmethod
    def send_reset_link(self, email: str, token: str) -> None:
        ...

    @abstractmethod
    def send_contact_message(self, name: str, email: str, message: str) -> None:
        ...


class LoggingNotifier(NotificationPort):
    """Default notifier while no mail transport is configured: writes to the log."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def send_reset_link(self, email: str, token: str) -> None:
        # The token is a live credential and never goes into the log
        self.logger.warning("No mail transport configured; password reset link for %s was not delivered", email)

    def send_contact_message(self, name: str, email: str, message: str) -> None:
        self.logger.info(
            "Contact message for %s from %s <%s>: %s",
            current_app.config.get("CONTACT_RECIPIENT"),
            name,
            email,
            message,
        )


class NullNotifier(NotificationPort):
    def send_reset_link(self, email: str, token: str) -> None:
        pass

    def send_contact_message(self, name: str, email: str, message: str) -> None:
        pass


def get_notifier() -> NotificationPort:
    return current_app.extensions["notifier"]
