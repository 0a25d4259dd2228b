"""Domain events for the User aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new shopper account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True, sanitize=False)
    last_name: String(required=True, sanitize=False)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    """Name or email of a user changed."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True, sanitize=False)
    last_name: String(required=True, sanitize=False)


@storefront.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id: Identifier(required=True)
    changed_at: DateTime(required=True)


@storefront.event(part_of="User")
class PasswordResetRequested:
    """A reset token was issued. The token itself stays on the aggregate."""

    __version__ = 1

    user_id: Identifier(required=True)
    expires_at: DateTime(required=True)


@storefront.event(part_of="User")
class AddressAdded:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    is_default: Boolean(default=False)


@storefront.event(part_of="User")
class AddressUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.event(part_of="User")
class AddressRemoved:
    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)


@storefront.event(part_of="User")
class DefaultAddressChanged:
    """A different address became the user's default."""

    __version__ = 1

    user_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()
