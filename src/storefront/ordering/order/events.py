"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderCreated:
    """A cart was checked out into a new pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    total_price = Float(required=True)
    item_count = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """The order moved through its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    user_id = Identifier(required=True)
    old_status = String(required=True)
    new_status = String(required=True)
    changed_at = DateTime(required=True)
