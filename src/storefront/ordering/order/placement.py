"""Checkout — turns the user's cart into a pending order.

All reads and checks happen before anything is written, and every write goes
through the same unit of work, so a failed checkout leaves the cart and the
catalogue exactly as they were.

Stock is validated twice: once for the whole cart, then per line right before
the decrement, against a fresh read of the product. The second check narrows
the window in which a concurrent checkout can oversell; it does not close it.
Closing it would take row locks or serializable isolation from the storage
engine.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.stock import load_products, validate_cart_stock
from storefront.ordering.order.order import Order, OrderAddress, generate_order_number

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Check out the user's cart."""

    user_id = Identifier(required=True)
    shipping_address_id = Identifier(required=True)
    billing_address_id = Identifier(required=True)
    notes = Text(sanitize=False)


def _owned_address(user, address_id):
    if not user.owns_address(address_id):
        raise ObjectNotFoundError(f"Address {address_id} not found")
    return next(a for a in user.addresses if str(a.id) == str(address_id))


def _unused_order_number(order_repo):
    number = generate_order_number()
    while order_repo.by_order_number(number) is not None:
        number = generate_order_number()
    return number


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user = current_domain.repository_for(User).get(command.user_id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.for_user(command.user_id)
        if cart is None or cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})

        stock_errors = validate_cart_stock(cart, load_products(cart))
        if stock_errors:
            raise ValidationError({"stock": stock_errors})

        shipping = _owned_address(user, command.shipping_address_id)
        billing = _owned_address(user, command.billing_address_id)

        product_repo = current_domain.repository_for(Product)
        reserved = []
        lines = []
        for item in cart.items:
            # Fresh read right before the decrement
            product = product_repo.get(item.product_id)
            if not product.is_active:
                raise ValidationError({"stock": [f'Product "{product.name}" is no longer available']})
            product.reserve_stock(item.quantity)
            reserved.append(product)
            lines.append(
                {
                    "product_id": str(product.id),
                    "product_name": product.name,
                    "unit_price": product.price,
                    "quantity": item.quantity,
                }
            )

        order_repo = current_domain.repository_for(Order)
        order = Order.place(
            order_number=_unused_order_number(order_repo),
            user_id=user.id,
            lines=lines,
            shipping_address=OrderAddress.snapshot(shipping),
            billing_address=OrderAddress.snapshot(billing),
            shipping_address_id=shipping.id,
            billing_address_id=billing.id,
            notes=command.notes,
        )
        cart.clear()

        for product in reserved:
            product_repo.add(product)
        order_repo.add(order)
        cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_number=order.order_number,
            user_id=str(user.id),
            total_price=order.total_price,
            item_count=len(lines),
        )
        return order.order_number
