import pytest
from storefront.ordering.order.order import Order, OrderAddress, generate_order_number


def _address(street="12 rue de la Paix"):
    return OrderAddress(
        first_name="Jane",
        last_name="Doe",
        street=street,
        city="Paris",
        zip_code="75002",
        country="France",
    )


def _default_lines():
    return [
        {"product_id": "prod-a", "product_name": "Shirt", "unit_price": 19.99, "quantity": 2},
        {"product_id": "prod-b", "product_name": "Mug", "unit_price": 7.5, "quantity": 1},
    ]


@pytest.fixture()
def make_order():
    """Build an unsaved order (total 47.48), optionally walked through `path` statuses."""

    def _make(*path, lines=None):
        order = Order.place(
            order_number=generate_order_number(),
            user_id="user-001",
            lines=_default_lines() if lines is None else lines,
            shipping_address=_address(),
            billing_address=_address("1 Billing Way"),
        )
        for status in path:
            order.change_status(status)
        return order

    return _make
