"""Read model of a cart priced against the live catalogue."""

from decimal import Decimal

from storefront.ordering.cart.stock import load_products
from storefront.utils.money import line_total, to_decimal


def summarize_cart(cart) -> dict:
    products = load_products(cart)

    lines = []
    total = Decimal("0.00")
    for item in cart.items:
        product = products.get(str(item.product_id))
        if product is None:
            continue
        amount = line_total(product.price, item.quantity)
        total += amount
        lines.append(
            {
                "item_id": str(item.id),
                "product_id": str(product.id),
                "product_name": product.name,
                "unit_price": float(to_decimal(product.price)),
                "quantity": item.quantity,
                "line_total": float(amount),
                "available_stock": product.stock,
                "is_available": product.is_active and item.quantity <= product.stock,
            }
        )

    return {
        "cart_id": str(cart.id),
        "items": lines,
        "total_items": len(cart.items),
        "total_quantity": cart.total_quantity,
        "total_price": float(total),
        "is_empty": cart.is_empty,
    }
