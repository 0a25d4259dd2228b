"""Cart reminder template — nudges owners of idle carts."""

from storefront.notifications.mailer import EmailTemplate


class CartReminderTemplate:
    template = EmailTemplate.CART_REMINDER.value

    @staticmethod
    def render(context: dict) -> dict:
        item_count = context.get("item_count", 0)
        return {
            "subject": "You left something in your cart",
            "body": (
                f"Hi {context.get('first_name', 'there')},\n\n"
                f"Your cart still holds {item_count} item(s). "
                "Stock is limited, so check out before they are gone."
            ),
        }
