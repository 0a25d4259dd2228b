"""Profile maintenance — command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User


@storefront.command(part_of="User")
class UpdateProfile:
    user_id: Identifier(required=True)
    first_name: String(max_length=100, sanitize=False)
    last_name: String(max_length=100, sanitize=False)
    email: String(max_length=254)


@storefront.command_handler(part_of=User)
class UpdateProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        if command.email and repo.email_taken(command.email, exclude_user_id=user.id):
            raise ValidationError({"email": ["An account with this email already exists"]})

        user.update_profile(
            first_name=command.first_name,
            last_name=command.last_name,
            email=command.email,
        )
        repo.add(user)
