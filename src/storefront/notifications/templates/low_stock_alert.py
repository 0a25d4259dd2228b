"""Low stock alert template — back-office notice when a product runs low."""

from storefront.notifications.mailer import EmailTemplate


class LowStockAlertTemplate:
    template = EmailTemplate.LOW_STOCK_ALERT.value

    @staticmethod
    def render(context: dict) -> dict:
        product_name = context.get("product_name", "Unknown product")
        stock = context.get("stock", 0)
        threshold = context.get("threshold", 0)
        return {
            "subject": f"Low stock: {product_name}",
            "body": (
                f'"{product_name}" is down to {stock} unit(s) (threshold: {threshold}).\n'
                "Please reorder soon to avoid running out."
            ),
        }
