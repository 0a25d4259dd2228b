"""Template registry — maps template names to template classes.

Each template renders a subject and a plain-text body from a context dict.
"""

from storefront.notifications.templates.admin_new_order import AdminNewOrderTemplate
from storefront.notifications.templates.cart_reminder import CartReminderTemplate
from storefront.notifications.templates.low_stock_alert import LowStockAlertTemplate
from storefront.notifications.templates.order_confirmation import OrderConfirmationTemplate
from storefront.notifications.templates.order_status_update import OrderStatusUpdateTemplate
from storefront.notifications.templates.password_reset import PasswordResetTemplate
from storefront.notifications.templates.welcome import WelcomeTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    template_cls.template: template_cls
    for template_cls in (
        WelcomeTemplate,
        PasswordResetTemplate,
        OrderConfirmationTemplate,
        OrderStatusUpdateTemplate,
        AdminNewOrderTemplate,
        LowStockAlertTemplate,
        CartReminderTemplate,
    )
}


def get_template(name: str):
    """Look up a template class by name."""
    template_cls = TEMPLATE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No template registered for: {name}")
    return template_cls
