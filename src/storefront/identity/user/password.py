"""Password change and reset — commands and handler.

A reset request for an unknown email completes silently so that callers cannot
discover which addresses hold an account.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.config import setting
from storefront.domain import storefront
from storefront.identity.shared.passwords import hash_password, validate_password, verify_password
from storefront.identity.user.user import User

logger = structlog.get_logger(__name__)


def reset_token_owner(token: str) -> User:
    """The user holding `token`, while the token is still unexpired."""
    user = current_domain.repository_for(User).by_reset_token(token)
    if user is None or not user.reset_token_is_valid(token):
        raise ValidationError({"token": ["Invalid or expired reset token"]})
    return user


@storefront.command(part_of="User")
class ChangePassword:
    user_id: Identifier(required=True)
    current_password: String(required=True, max_length=128, sanitize=False)
    new_password: String(required=True, max_length=128, sanitize=False)


@storefront.command(part_of="User")
class RequestPasswordReset:
    email: String(required=True, max_length=254)


@storefront.command(part_of="User")
class ResetPassword:
    token: String(required=True, max_length=128)
    new_password: String(required=True, max_length=128, sanitize=False)


@storefront.command_handler(part_of=User)
class PasswordHandler:
    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if not verify_password(user.password_hash, command.current_password):
            raise ValidationError({"current_password": ["Current password is incorrect"]})
        validate_password(command.new_password, field="new_password")

        user.change_password(hash_password(command.new_password))
        repo.add(user)

    @handle(RequestPasswordReset)
    def request_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_email(command.email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        user.request_password_reset(ttl_minutes=int(setting("password_reset_ttl_minutes")))
        repo.add(user)
        logger.info("Password reset requested", user_id=str(user.id))

    @handle(ResetPassword)
    def reset_password(self, command):
        user = reset_token_owner(command.token)

        validate_password(command.new_password, field="new_password")
        user.change_password(hash_password(command.new_password))
        current_domain.repository_for(User).add(user)
