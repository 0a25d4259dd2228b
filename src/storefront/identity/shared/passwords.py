"""Password hashing with Argon2id."""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from protean.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 8

_hasher = PasswordHasher()


def validate_password(password: str, field: str = "password") -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({field: [f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"]})


def hash_password(password: str) -> str:
    return _hasher.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """True when `password` matches the stored hash. Malformed hashes never match."""
    try:
        return _hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
