"""Cart aggregate — a user's mutable selection of products before checkout.

Each user owns exactly one cart. Lines are keyed by product: adding a product
that is already in the cart increases the existing line. Quantities are
checked against live product stock whenever a line grows.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.domain import storefront
from storefront.ordering.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityUpdated,
    CartItemRemoved,
    CartReminderDue,
    GuestCartMerged,
)


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


def _check_quantity(quantity):
    if quantity is None or quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than zero"]})


def _check_stock(product, quantity):
    if not product.in_stock:
        raise ValidationError({"stock": [f'Product "{product.name}" is out of stock']})
    if quantity > product.stock:
        raise ValidationError(
            {"stock": [f'Insufficient stock for "{product.name}" (requested: {quantity}, available: {product.stock})']}
        )


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()
    reminder_sent_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(i.product_id) for i in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        return sum(i.quantity for i in self.items)

    def line_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def find_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found")
        return item

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity):
        """Add `quantity` units of `product`, merging into an existing line."""
        _check_quantity(quantity)

        existing = self.line_for(product.id)
        requested = quantity + (existing.quantity if existing else 0)
        _check_stock(product, requested)

        now = datetime.now(UTC)

        if existing:
            existing.quantity = requested
            item_id = str(existing.id)
        else:
            item = CartItem(product_id=product.id, quantity=quantity, added_at=now)
            self.add_items(item)
            item_id = str(item.id)

        self._touch(now)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=requested,
            )
        )
        return item_id

    def update_item_quantity(self, item_id, quantity, product):
        """Set a line's quantity. `product` is the line's product, for the stock check."""
        _check_quantity(quantity)
        item = self.find_item(item_id)
        _check_stock(product, quantity)

        previous_quantity = item.quantity
        item.quantity = quantity
        self._touch(datetime.now(UTC))

        self.raise_(
            CartItemQuantityUpdated(
                cart_id=str(self.id),
                item_id=str(item.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self.find_item(item_id)
        self.remove_items(item)
        self._touch(datetime.now(UTC))

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                item_id=str(item.id),
                product_id=str(item.product_id),
            )
        )

    def clear(self):
        """Drop every line. Used by the shopper and after a successful checkout."""
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self._touch(datetime.now(UTC))

        self.raise_(CartCleared(cart_id=str(self.id), items_removed=removed))

    def record_merge(self, merged_count, skipped_count):
        self.raise_(
            GuestCartMerged(
                cart_id=str(self.id),
                merged_count=merged_count,
                skipped_count=skipped_count,
            )
        )

    def flag_for_reminder(self, as_of=None):
        as_of = as_of or datetime.now(UTC)
        self.reminder_sent_at = as_of
        self.raise_(
            CartReminderDue(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_count=len(self.items),
                total_quantity=self.total_quantity,
            )
        )

    def _touch(self, now):
        self.updated_at = now
        self.reminder_sent_at = None


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_user(self, user_id) -> Cart | None:
        carts = self._dao.query.filter(user_id=user_id).all().items
        return self.get(carts[0].id) if carts else None

    def get_or_create(self, user_id) -> Cart:
        return self.for_user(user_id) or Cart.create(user_id=user_id)

    def all_carts(self) -> list[Cart]:
        return [self.get(c.id) for c in self._dao.query.all().items]
