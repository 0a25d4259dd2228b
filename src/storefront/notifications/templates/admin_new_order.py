"""New order template — back-office notice for every order placed."""

from storefront.notifications.mailer import EmailTemplate


class AdminNewOrderTemplate:
    template = EmailTemplate.ADMIN_NEW_ORDER.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        return {
            "subject": f"New order {order_number}",
            "body": (
                f"Order {order_number} was placed by {context.get('customer_email', 'unknown')}.\n"
                f"Total: {context.get('total_price', '0.00')} for {context.get('item_count', 0)} item(s)."
            ),
        }
