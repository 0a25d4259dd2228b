"""Back-office status updates — command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order.order import Order, OrderStatus
from storefront.ordering.order.restock import restore_stock


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_number = String(required=True, max_length=32)
    status = String(required=True, max_length=20)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.by_order_number(command.order_number)
        if order is None:
            raise ObjectNotFoundError(f"Order {command.order_number} not found")

        changed = order.change_status(command.status)
        if changed and order.status == OrderStatus.CANCELLED.value:
            restore_stock(order)

        repo.add(order)
        return order.status
