"""Mailer port — abstract interface for transactional email delivery."""

from abc import ABC, abstractmethod
from enum import Enum


class EmailTemplate(Enum):
    WELCOME = "welcome"
    PASSWORD_RESET = "password_reset"
    ORDER_CONFIRMATION = "order_confirmation"
    ORDER_STATUS_UPDATE = "order_status_update"
    ADMIN_NEW_ORDER = "admin_new_order"
    LOW_STOCK_ALERT = "low_stock_alert"
    CART_REMINDER = "cart_reminder"


class MailerPort(ABC):
    """Abstract interface for email adapters."""

    @abstractmethod
    def send(self, template: str, recipient: str, context: dict) -> bool:
        """Render `template` with `context` and deliver it to `recipient`.

        Returns True when the message was accepted for delivery.
        """
        ...
