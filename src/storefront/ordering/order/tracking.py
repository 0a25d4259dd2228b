"""Read models over orders: tracking timeline and per-user statistics."""

from decimal import Decimal

from storefront.ordering.order.order import OrderStatus
from storefront.utils.money import format_amount, to_decimal

_STEPS = [
    (OrderStatus.CONFIRMED, "Order confirmed"),
    (OrderStatus.PROCESSING, "Being prepared"),
    (OrderStatus.SHIPPED, "Shipped"),
    (OrderStatus.DELIVERED, "Delivered"),
]

_ORDER_OF = {
    OrderStatus.PENDING: 0,
    OrderStatus.CONFIRMED: 1,
    OrderStatus.PROCESSING: 2,
    OrderStatus.SHIPPED: 3,
    OrderStatus.DELIVERED: 4,
}

_OPEN_STATES = {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING}


def build_timeline(order) -> list[dict]:
    """Completed steps of the order's lifecycle, oldest first."""
    status = OrderStatus(order.status)
    timeline = [
        {"status": OrderStatus.PENDING.value, "label": "Order received", "date": order.created_at},
    ]

    if status == OrderStatus.CANCELLED:
        timeline.append({"status": status.value, "label": "Cancelled", "date": order.updated_at})
        return timeline

    dates = {
        OrderStatus.SHIPPED: order.shipped_at,
        OrderStatus.DELIVERED: order.delivered_at,
    }
    for step, label in _STEPS:
        if _ORDER_OF[step] <= _ORDER_OF[status]:
            timeline.append({"status": step.value, "label": label, "date": dates.get(step) or order.updated_at})
    return timeline


def tracking_info(order) -> dict:
    return {
        "order_number": order.order_number,
        "status": order.status,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
        "shipped_at": order.shipped_at,
        "delivered_at": order.delivered_at,
        "timeline": build_timeline(order),
        "can_be_cancelled": order.can_be_cancelled,
        "is_completed": order.is_completed,
    }


def order_statistics(orders) -> dict:
    """Counts per bucket, and spend over delivered orders only."""
    stats = {
        "total_orders": len(orders),
        "pending_orders": 0,
        "completed_orders": 0,
        "cancelled_orders": 0,
    }
    spent = Decimal("0.00")

    for order in orders:
        status = OrderStatus(order.status)
        if status in _OPEN_STATES:
            stats["pending_orders"] += 1
        elif status == OrderStatus.DELIVERED:
            stats["completed_orders"] += 1
            spent += to_decimal(order.total_price)
        elif status == OrderStatus.CANCELLED:
            stats["cancelled_orders"] += 1

    average = spent / stats["completed_orders"] if stats["completed_orders"] else Decimal("0.00")
    stats["total_spent"] = format_amount(spent)
    stats["average_order_value"] = format_amount(average)
    return stats
