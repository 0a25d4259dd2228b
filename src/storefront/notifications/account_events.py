"""Account emails — welcome and password reset."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.identity.user.events import PasswordResetRequested, UserRegistered
from storefront.identity.user.user import User
from storefront.notifications.dispatch import notify
from storefront.notifications.mailer import EmailTemplate

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=User)
class AccountNotificationHandler:
    @handle(UserRegistered)
    def on_user_registered(self, event: UserRegistered) -> None:
        notify(EmailTemplate.WELCOME, event.email, {"first_name": event.first_name})

    @handle(PasswordResetRequested)
    def on_password_reset_requested(self, event: PasswordResetRequested) -> None:
        try:
            user = current_domain.repository_for(User).get(event.user_id)
        except ObjectNotFoundError:
            logger.error("User not found for password reset email", user_id=str(event.user_id))
            return

        if not user.password_reset_token:
            logger.warning("Password reset token already consumed", user_id=str(event.user_id))
            return

        notify(
            EmailTemplate.PASSWORD_RESET,
            user.email,
            {
                "first_name": user.first_name,
                "token": user.password_reset_token,
                "expires_at": event.expires_at.isoformat(),
            },
        )
