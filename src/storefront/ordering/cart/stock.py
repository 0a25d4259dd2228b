"""Stock validation of cart lines against the live catalogue."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product


def load_products(cart) -> dict:
    """Map product id → Product for every line in `cart`. Missing products are left out."""
    repo = current_domain.repository_for(Product)
    products = {}
    for item in cart.items:
        try:
            products[str(item.product_id)] = repo.get(item.product_id)
        except ObjectNotFoundError:
            continue
    return products


def validate_cart_stock(cart, products=None) -> list[str]:
    """Return one human-readable message per line that cannot be fulfilled as-is."""
    if products is None:
        products = load_products(cart)

    errors = []
    for item in cart.items:
        product = products.get(str(item.product_id))
        if product is None:
            errors.append(f"Product {item.product_id} is no longer available")
        elif not product.is_active:
            errors.append(f'Product "{product.name}" is no longer available')
        elif not product.in_stock:
            errors.append(f'Product "{product.name}" is out of stock')
        elif item.quantity > product.stock:
            errors.append(
                f'Insufficient stock for "{product.name}" (requested: {item.quantity}, available: {product.stock})'
            )
    return errors
