"""Access to the `[custom]` section of the active domain configuration."""

from typing import Any

from protean.utils.globals import current_domain

_DEFAULTS: dict[str, Any] = {
    "admin_email": "admin@storefront.local",
    "from_email": "no-reply@storefront.local",
    "password_reset_ttl_minutes": 60,
    "abandoned_cart_idle_hours": 24,
}


def setting(name: str) -> Any:
    """Return a custom setting, falling back to the built-in default."""
    custom = current_domain.config.get("custom") or {}
    if name in custom:
        return custom[name]
    return _DEFAULTS[name]
