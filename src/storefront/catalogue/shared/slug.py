"""URL slug generation for catalogue items."""

import re
import unicodedata

_NON_WORD = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """Lowercase ASCII slug with single hyphens between words."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = _NON_WORD.sub("-", normalized.lower()).strip("-")
    return slug or "item"


def unique_slug(text: str, is_taken) -> str:
    """Return a slug for `text` for which `is_taken(slug)` is false.

    Collisions get a numeric suffix: `shirt`, `shirt-1`, `shirt-2`, ...
    """
    base = slugify(text)
    candidate = base
    counter = 1
    while is_taken(candidate):
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate
