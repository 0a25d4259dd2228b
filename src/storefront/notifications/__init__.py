"""Mailer registry — singleton access to the configured mailer adapter.

Only the in-memory FakeMailer ships with the storefront; a real transport
implements `MailerPort` and is installed with `set_mailer()` at startup.
"""

from storefront.notifications.mailer import MailerPort

_mailer: MailerPort | None = None


def get_mailer() -> MailerPort:
    """Return the configured mailer, creating the fake one on first use."""
    global _mailer
    if _mailer is None:
        from storefront.config import setting
        from storefront.notifications.fake_mailer import FakeMailer

        _mailer = FakeMailer(sender=setting("from_email"))
    return _mailer


def set_mailer(mailer: MailerPort) -> None:
    global _mailer
    _mailer = mailer


def reset_mailer():
    """Drop the mailer singleton (useful for testing)."""
    global _mailer
    _mailer = None
