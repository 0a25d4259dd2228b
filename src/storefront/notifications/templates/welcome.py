"""Welcome template — sent when a user registers."""

from storefront.notifications.mailer import EmailTemplate


class WelcomeTemplate:
    template = EmailTemplate.WELCOME.value

    @staticmethod
    def render(context: dict) -> dict:
        first_name = context.get("first_name", "there")
        return {
            "subject": "Welcome to Storefront",
            "body": f"Hi {first_name},\n\nYour account is ready. Happy shopping!",
        }
