"""Order status update template — sent to the customer on every transition."""

from storefront.notifications.mailer import EmailTemplate

_STATUS_LABELS = {
    "pending": "received",
    "confirmed": "confirmed",
    "processing": "being prepared",
    "shipped": "on its way",
    "delivered": "delivered",
    "cancelled": "cancelled",
}


class OrderStatusUpdateTemplate:
    template = EmailTemplate.ORDER_STATUS_UPDATE.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        new_status = context.get("new_status", "")
        label = _STATUS_LABELS.get(new_status, new_status)
        return {
            "subject": f"Order {order_number} is {label}",
            "body": (
                f"Hi {context.get('customer_name', 'there')},\n\n"
                f"Your order {order_number} is now {label}.\n\n"
                "You can follow it from your account at any time."
            ),
        }
