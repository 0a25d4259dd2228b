"""User aggregate root with the Address entity."""

import secrets
from datetime import datetime, timedelta

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, String

from storefront.domain import storefront
from storefront.identity.shared.email import normalize_email, validate_email
from storefront.identity.user.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DefaultAddressChanged,
    PasswordChanged,
    PasswordResetRequested,
    ProfileUpdated,
    UserRegistered,
)


@storefront.entity(part_of="User")
class Address:
    """A postal address in a user's address book.

    Orders copy the address at checkout, so edits here never alter past orders.
    """

    first_name: String(required=True, max_length=100, sanitize=False)
    last_name: String(required=True, max_length=100, sanitize=False)
    street: String(required=True, max_length=255, sanitize=False)
    city: String(required=True, max_length=100, sanitize=False)
    zip_code: String(required=True, max_length=20, sanitize=False)
    country: String(required=True, max_length=100, sanitize=False)
    phone: String(max_length=30, sanitize=False)
    is_default: Boolean(default=False)
    created_at: DateTime(default=datetime.now)

    @property
    def formatted(self) -> str:
        return f"{self.first_name} {self.last_name}, {self.street}, {self.zip_code} {self.city}, {self.country}"


@storefront.aggregate
class User:
    """A registered shopper (or back-office admin).

    The address book lives inside the aggregate so that the "exactly one
    default address" rule is checked on every change.
    """

    email: String(required=True, max_length=254, unique=True)
    first_name: String(required=True, max_length=100, sanitize=False)
    last_name: String(required=True, max_length=100, sanitize=False)
    password_hash: String(required=True, max_length=255)
    is_verified: Boolean(default=False)
    is_admin: Boolean(default=False)
    password_reset_token: String(max_length=128)
    password_reset_expires_at: DateTime()
    addresses: HasMany(Address)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    @classmethod
    def register(cls, email, password_hash, first_name, last_name):
        email = normalize_email(email)
        validate_email(email)

        now = datetime.now()
        user = cls(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                registered_at=now,
            )
        )
        return user

    def update_profile(self, first_name=None, last_name=None, email=None):
        if email is not None:
            email = normalize_email(email)
            validate_email(email)
            self.email = email
        if first_name is not None:
            self.first_name = first_name
        if last_name is not None:
            self.last_name = last_name

        self.updated_at = datetime.now()
        self.raise_(
            ProfileUpdated(
                user_id=self.id,
                email=self.email,
                first_name=self.first_name,
                last_name=self.last_name,
            )
        )

    def verify(self):
        if self.is_verified:
            raise ValidationError({"is_verified": ["Account is already verified"]})
        self.is_verified = True
        self.updated_at = datetime.now()

    def promote_to_admin(self):
        self.is_admin = True
        self.updated_at = datetime.now()

    # -------------------------------------------------------------------
    # Passwords
    # -------------------------------------------------------------------
    def change_password(self, new_password_hash):
        now = datetime.now()
        self.password_hash = new_password_hash
        self.password_reset_token = None
        self.password_reset_expires_at = None
        self.updated_at = now
        self.raise_(PasswordChanged(user_id=self.id, changed_at=now))

    def request_password_reset(self, ttl_minutes=60):
        now = datetime.now()
        self.password_reset_token = secrets.token_urlsafe(32)
        self.password_reset_expires_at = now + timedelta(minutes=ttl_minutes)
        self.updated_at = now
        self.raise_(
            PasswordResetRequested(
                user_id=self.id,
                expires_at=self.password_reset_expires_at,
            )
        )

    def reset_token_is_valid(self, token, now=None) -> bool:
        if not self.password_reset_token or not self.password_reset_expires_at:
            return False
        if not secrets.compare_digest(self.password_reset_token, token):
            return False
        return (now or datetime.now()) < self.password_reset_expires_at

    # -------------------------------------------------------------------
    # Address book
    # -------------------------------------------------------------------
    def find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ObjectNotFoundError(f"Address {address_id} not found")
        return address

    def owns_address(self, address_id) -> bool:
        return any(str(a.id) == str(address_id) for a in self.addresses)

    def add_address(
        self,
        first_name,
        last_name,
        street,
        city,
        zip_code,
        country,
        phone=None,
        is_default=False,
    ):
        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = Address(
                first_name=first_name,
                last_name=last_name,
                street=street,
                city=city,
                zip_code=zip_code,
                country=country,
                phone=phone,
                is_default=is_default,
            )
            self.add_addresses(address)

        self.updated_at = datetime.now()
        self.raise_(
            AddressAdded(
                user_id=self.id,
                address_id=address.id,
                is_default=is_default,
            )
        )
        return address

    def update_address(self, address_id, is_default=None, **kwargs):
        address = self.find_address(address_id)

        for field, value in kwargs.items():
            setattr(address, field, value)

        self.updated_at = datetime.now()
        self.raise_(AddressUpdated(user_id=self.id, address_id=address.id))

        if is_default and not address.is_default:
            self.set_default_address(address.id)

    def remove_address(self, address_id):
        address = self.find_address(address_id)

        if len(self.addresses) <= 1:
            raise ValidationError({"addresses": ["Cannot remove the last address"]})

        was_default = address.is_default

        with atomic_change(self):
            # Promote a survivor before the default leaves the book
            if was_default:
                successor = next(a for a in self.addresses if a.id != address.id)
                successor.is_default = True
            self.remove_addresses(address)

        self.updated_at = datetime.now()
        self.raise_(AddressRemoved(user_id=self.id, address_id=address.id))

    def set_default_address(self, address_id):
        address = self.find_address(address_id)

        previous_default = self.default_address
        previous_default_id = previous_default.id if previous_default else None

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True

        self.updated_at = datetime.now()
        self.raise_(
            DefaultAddressChanged(
                user_id=self.id,
                address_id=address.id,
                previous_default_address_id=previous_default_id,
            )
        )


@storefront.repository(part_of=User)
class UserRepository:
    def by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=normalize_email(email)).all().items
        return self.get(users[0].id) if users else None

    def by_reset_token(self, token: str) -> User | None:
        if not token:
            return None
        users = self._dao.query.filter(password_reset_token=token).all().items
        return self.get(users[0].id) if users else None

    def email_taken(self, email: str, exclude_user_id=None) -> bool:
        user = self.by_email(email)
        return user is not None and str(user.id) != str(exclude_user_id)
