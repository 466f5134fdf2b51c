"""Notification surface for user facing messages."""

import logging
from dataclasses import dataclass, field
from typing import Protocol


class NotificationService(Protocol):
    """Surface used to tell the user about the outcome of a command."""

    def show_error_message(self, message: str) -> None:
        """Show an error to the user."""

    def show_info_message(self, message: str) -> None:
        """Show an informational message to the user."""


@dataclass(frozen=True, kw_only=True)
class LoggingNotificationService:
    """Notification service reporting through a logger."""

    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("apex_quick_launch.notifications")
    )

    def show_error_message(self, message: str) -> None:
        self.logger.error(message)

    def show_info_message(self, message: str) -> None:
        self.logger.info(message)
