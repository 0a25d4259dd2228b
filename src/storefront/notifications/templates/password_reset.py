"""Password reset template — carries the one-time reset token."""

from storefront.notifications.mailer import EmailTemplate


class PasswordResetTemplate:
    template = EmailTemplate.PASSWORD_RESET.value

    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Reset your password",
            "body": (
                f"Hi {context.get('first_name', 'there')},\n\n"
                f"Use this code to choose a new password: {context.get('token', '')}\n"
                f"It expires at {context.get('expires_at', 'soon')}.\n\n"
                "If you did not ask for a reset, you can ignore this email."
            ),
        }
