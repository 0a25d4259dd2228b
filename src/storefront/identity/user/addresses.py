"""Address book management — commands and handler."""

from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user.user import User

_ADDRESS_FIELDS = ("first_name", "last_name", "street", "city", "zip_code", "country", "phone")


@storefront.command(part_of="User")
class AddAddress:
    """Add an address to a user's address book."""

    user_id: Identifier(required=True)
    first_name: String(required=True, max_length=100, sanitize=False)
    last_name: String(required=True, max_length=100, sanitize=False)
    street: String(required=True, max_length=255, sanitize=False)
    city: String(required=True, max_length=100, sanitize=False)
    zip_code: String(required=True, max_length=20, sanitize=False)
    country: String(required=True, max_length=100, sanitize=False)
    phone: String(max_length=30, sanitize=False)
    is_default: Boolean(default=False)


@storefront.command(part_of="User")
class UpdateAddress:
    """Modify fields of an existing address, optionally making it the default."""

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    first_name: String(max_length=100, sanitize=False)
    last_name: String(max_length=100, sanitize=False)
    street: String(max_length=255, sanitize=False)
    city: String(max_length=100, sanitize=False)
    zip_code: String(max_length=20, sanitize=False)
    country: String(max_length=100, sanitize=False)
    phone: String(max_length=30, sanitize=False)
    is_default: Boolean(default=False)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command(part_of="User")
class SetDefaultAddress:
    """Designate an existing address as the user's default."""

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            **{field: getattr(command, field) for field in _ADDRESS_FIELDS},
            is_default=command.is_default,
        )
        repo.add(user)
        return str(address.id)

    @handle(UpdateAddress)
    def update_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)

        updates = {}
        for field in _ADDRESS_FIELDS:
            value = getattr(command, field, None)
            if value is not None:
                updates[field] = value

        user.update_address(command.address_id, is_default=command.is_default, **updates)
        repo.add(user)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_address(command.address_id)
        repo.add(user)

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_default_address(command.address_id)
        repo.add(user)
