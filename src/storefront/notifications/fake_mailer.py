"""Fake mailer — records rendered messages in memory for tests and local runs."""

from uuid import uuid4

from storefront.notifications.mailer import MailerPort
from storefront.notifications.templates import get_template


class FakeMailer(MailerPort):
    """Mailer that renders templates and keeps the result instead of sending it."""

    def __init__(self, sender: str = "no-reply@storefront.local"):
        self.sender = sender
        self.sent_emails: list[dict] = []
        self.should_succeed = True

    def configure(self, should_succeed: bool = True):
        """Configure the fake adapter behavior for testing."""
        self.should_succeed = should_succeed

    def send(self, template: str, recipient: str, context: dict) -> bool:
        rendered = get_template(template).render(context)

        if not self.should_succeed:
            return False

        self.sent_emails.append(
            {
                "message_id": f"email-{uuid4().hex[:12]}",
                "template": template,
                "from": self.sender,
                "to": recipient,
                "subject": rendered["subject"],
                "body": rendered["body"],
            }
        )
        return True

    def sent_to(self, recipient: str, template: str | None = None) -> list[dict]:
        return [
            email
            for email in self.sent_emails
            if email["to"] == recipient and (template is None or email["template"] == template)
        ]

    def reset(self):
        """Clear sent emails (useful between tests)."""
        self.sent_emails.clear()
        self.should_succeed = True
