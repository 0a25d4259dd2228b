"""Return the units held by an order to the catalogue."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product

logger = structlog.get_logger(__name__)


def restore_stock(order):
    """Add each line's ordered quantity back to its product's current stock."""
    repo = current_domain.repository_for(Product)
    for item in order.items:
        try:
            product = repo.get(item.product_id)
        except ObjectNotFoundError:
            logger.warning(
                "Product gone; stock not restored",
                order_number=order.order_number,
                product_id=str(item.product_id),
                quantity=item.quantity,
            )
            continue

        product.release_stock(item.quantity)
        repo.add(product)
