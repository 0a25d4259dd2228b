"""Customer-initiated order cancellation — command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order
from storefront.ordering.order.restock import restore_stock


@storefront.command(part_of="Order")
class CancelOrder:
    user_id = Identifier(required=True)
    order_number = String(required=True, max_length=32)


def owned_order(order_number, user_id) -> Order:
    """Load an order that belongs to `user_id`. Someone else's order counts as missing."""
    order = current_domain.repository_for(Order).by_order_number(order_number)
    if order is None or str(order.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Order {order_number} not found")
    return order


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order = owned_order(command.order_number, command.user_id)
        order.cancel()
        restore_stock(order)
        current_domain.repository_for(Order).add(order)
