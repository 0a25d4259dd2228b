"""Sales figures read off order lines.

Cancelled orders do not count: their stock went back on the shelf.
"""

from collections import Counter

from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.ordering.order.order import Order


def units_sold(orders) -> Counter:
    sold = Counter()
    for order in orders:
        for item in order.items:
            sold[str(item.product_id)] += item.quantity
    return sold


def best_sellers(limit: int = 8) -> list[tuple[Product, int]]:
    """Active products with at least one unit sold, most units first."""
    sold = units_sold(current_domain.repository_for(Order).not_cancelled())
    products = {str(p.id): p for p in current_domain.repository_for(Product).active()}

    ranked = [(products[product_id], quantity) for product_id, quantity in sold.items() if product_id in products]
    ranked.sort(key=lambda pair: (-pair[1], pair[0].name.lower()))
    return ranked[:limit]
