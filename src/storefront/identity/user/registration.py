"""User registration and account flags — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.shared.passwords import hash_password, validate_password
from storefront.identity.user.user import User


@storefront.command(part_of="User")
class RegisterUser:
    """Create a shopper account."""

    email: String(required=True, max_length=254)
    password: String(required=True, max_length=128, sanitize=False)
    first_name: String(required=True, max_length=100, sanitize=False)
    last_name: String(required=True, max_length=100, sanitize=False)


@storefront.command(part_of="User")
class VerifyUser:
    user_id: Identifier(required=True)


@storefront.command(part_of="User")
class PromoteToAdmin:
    email: String(required=True, max_length=254)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.email_taken(command.email):
            raise ValidationError({"email": ["An account with this email already exists"]})

        validate_password(command.password)

        user = User.register(
            email=command.email,
            password_hash=hash_password(command.password),
            first_name=command.first_name,
            last_name=command.last_name,
        )
        repo.add(user)
        return str(user.id)

    @handle(VerifyUser)
    def verify_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.verify()
        repo.add(user)

    @handle(PromoteToAdmin)
    def promote_to_admin(self, command):
        repo = current_domain.repository_for(User)
        user = repo.by_email(command.email)
        if user is None:
            raise ObjectNotFoundError(f"No user registered with {command.email}")
        user.promote_to_admin()
        repo.add(user)
        return str(user.id)
