"""Email address normalization and structural validation."""

from protean.exceptions import ValidationError

_FORBIDDEN = (" ", "\t", "\n", ";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> None:
    """Raise ValidationError unless `email` has one @, non-empty parts and a dotted domain."""
    invalid = ValidationError({"email": [f"Invalid email address: {email!r}"]})

    if not email or len(email) > 254 or email.count("@") != 1:
        raise invalid
    if any(ch in email for ch in _FORBIDDEN):
        raise invalid

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise invalid
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise invalid
    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        raise invalid

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise invalid
