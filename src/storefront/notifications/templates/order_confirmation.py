"""Order confirmation template — sent to the customer when an order is created."""

from storefront.notifications.mailer import EmailTemplate


class OrderConfirmationTemplate:
    template = EmailTemplate.ORDER_CONFIRMATION.value

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        total_price = context.get("total_price", "0.00")
        customer_name = context.get("customer_name", "there")
        return {
            "subject": f"Order {order_number} received",
            "body": (
                f"Hi {customer_name},\n\n"
                f"Thank you for your order {order_number}.\n\n"
                f"Order Total: {total_price}\n"
                f"Items: {context.get('item_count', 0)}\n\n"
                "We'll let you know as soon as it ships."
            ),
        }
