"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartItemAdded:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@storefront.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    item_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    cart_id = Identifier(required=True)
    items_removed = Integer(default=0)


@storefront.event(part_of="Cart")
class GuestCartMerged:
    """Lines from an anonymous session were folded into a user's cart at login."""

    __version__ = 1

    cart_id = Identifier(required=True)
    merged_count = Integer(default=0)
    skipped_count = Integer(default=0)


@storefront.event(part_of="Cart")
class CartReminderDue:
    """A non-empty cart sat idle long enough to warrant a reminder email."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total_quantity = Integer(required=True)
