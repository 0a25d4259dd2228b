"""Stock availability check used by product pages before adding to cart."""

from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product


def check_availability(product_id, quantity: int = 1) -> dict:
    product = current_domain.repository_for(Product).get(product_id)

    if not product.is_active:
        return {"available": False, "stock": 0, "message": "Product is no longer available"}
    if not product.in_stock:
        return {"available": False, "stock": 0, "message": "Product is out of stock"}
    if quantity > product.stock:
        return {
            "available": False,
            "stock": product.stock,
            "message": f"Only {product.stock} unit(s) available",
        }
    return {"available": True, "stock": product.stock, "message": "Product is available"}
