"""Order aggregate — an immutable snapshot of a cart with a status lifecycle.

State machine:
    pending → confirmed → processing → shipped → delivered
    cancelled (from pending or confirmed only)

Order lines copy the product name and price at checkout and never follow
later catalogue edits.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.ordering.order.events import OrderCreated, OrderStatusChanged
from storefront.utils.money import line_total, to_decimal


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED}

_COMPLETED_STATES = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


def generate_order_number(now=None) -> str:
    """`ORD-<year>-<8 uppercase hex chars>`"""
    now = now or datetime.now(UTC)
    return f"ORD-{now.year}-{uuid4().hex[:8].upper()}"


def parse_status(value) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        raise ValidationError({"status": [f"Invalid order status: {value}"]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class OrderAddress:
    """A shipping or billing address captured at checkout time.

    Later edits to the user's address book do not reach orders already placed.
    """

    first_name = String(required=True, max_length=100, sanitize=False)
    last_name = String(required=True, max_length=100, sanitize=False)
    street = String(required=True, max_length=255, sanitize=False)
    city = String(required=True, max_length=100, sanitize=False)
    zip_code = String(required=True, max_length=20, sanitize=False)
    country = String(required=True, max_length=100, sanitize=False)
    phone = String(max_length=30, sanitize=False)

    @classmethod
    def snapshot(cls, address):
        return cls(
            first_name=address.first_name,
            last_name=address.last_name,
            street=address.street,
            city=address.city,
            zip_code=address.zip_code,
            country=address.country,
            phone=address.phone,
        )

    @property
    def formatted(self) -> str:
        return f"{self.first_name} {self.last_name}, {self.street}, {self.zip_code} {self.city}, {self.country}"


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255, sanitize=False)
    unit_price = Float(required=True, min_value=0.01)
    quantity = Integer(required=True, min_value=1)

    @property
    def total_price(self) -> float:
        return float(line_total(self.unit_price, self.quantity))


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=32, unique=True)
    user_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    total_price = Float(min_value=0.0, default=0.0)
    shipping_address = ValueObject(OrderAddress, required=True)
    billing_address = ValueObject(OrderAddress, required=True)
    shipping_address_id = Identifier()
    billing_address_id = Identifier()
    notes = Text(sanitize=False)
    created_at = DateTime()
    updated_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_number,
        user_id,
        lines,
        shipping_address,
        billing_address,
        shipping_address_id=None,
        billing_address_id=None,
        notes=None,
    ):
        """Create a pending order.

        Args:
            lines: List of dicts with product_id, product_name, unit_price, quantity.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        total = sum((line_total(line["unit_price"], line["quantity"]) for line in lines), Decimal("0.00"))

        order = cls(
            order_number=order_number,
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            total_price=float(total),
            shipping_address=shipping_address,
            billing_address=billing_address,
            shipping_address_id=shipping_address_id,
            billing_address_id=billing_address_id,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    product_name=line["product_name"],
                    unit_price=float(to_decimal(line["unit_price"])),
                    quantity=line["quantity"],
                )
            )

        order.raise_(
            OrderCreated(
                order_id=str(order.id),
                order_number=order_number,
                user_id=str(user_id),
                total_price=order.total_price,
                item_count=len(lines),
                created_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def can_be_cancelled(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    @property
    def is_completed(self) -> bool:
        return OrderStatus(self.status) in _COMPLETED_STATES

    @property
    def total_items(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(i.quantity for i in self.items)

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    def change_status(self, new_status) -> bool:
        """Move the order to `new_status`.

        Returns False, and changes nothing, when the order already has that
        status. Raises ValidationError for unknown statuses and disallowed
        transitions.
        """
        target = parse_status(new_status)
        current = OrderStatus(self.status)

        if target == current:
            return False

        if target not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.SHIPPED and not self.shipped_at:
            self.shipped_at = now
        if target == OrderStatus.DELIVERED and not self.delivered_at:
            self.delivered_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                user_id=str(self.user_id),
                old_status=current.value,
                new_status=target.value,
                changed_at=now,
            )
        )
        return True

    def cancel(self):
        """Cancel on the customer's behalf. Stock restoration is the caller's job."""
        if not self.can_be_cancelled:
            raise ValidationError({"status": [f"Order cannot be cancelled once it is {self.status}"]})
        self.change_status(OrderStatus.CANCELLED.value)


@storefront.repository(part_of=Order)
class OrderRepository:
    def by_order_number(self, order_number) -> Order | None:
        orders = self._dao.query.filter(order_number=order_number).all().items
        return self.get(orders[0].id) if orders else None

    def for_user(self, user_id) -> list[Order]:
        orders = [self.get(o.id) for o in self._dao.query.filter(user_id=user_id).all().items]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    def with_status(self, status) -> list[Order]:
        return [self.get(o.id) for o in self._dao.query.filter(status=status).all().items]

    def not_cancelled(self) -> list[Order]:
        orders = [o for o in self._dao.query.all().items if o.status != OrderStatus.CANCELLED.value]
        return [self.get(o.id) for o in orders]
