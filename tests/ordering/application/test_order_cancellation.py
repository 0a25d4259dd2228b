"""Application tests for cancellation and back-office status updates."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.product.product import Product
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.cancellation import CancelOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus


@pytest.fixture()
def placed(shopper, create_product):
    """An order for 2 × A and 1 × B. Stock after checkout: A 8, B 4."""
    user_id, address_id = shopper
    product_a = create_product(name="A", price=10.0, stock=10)
    product_b = create_product(name="B", price=5.0, stock=5)
    for product_id, quantity in ((product_a, 2), (product_b, 1)):
        current_domain.process(AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False)
    order_number = current_domain.process(
        PlaceOrder(user_id=user_id, shipping_address_id=address_id, billing_address_id=address_id),
        asynchronous=False,
    )
    return {"user_id": user_id, "order_number": order_number, "a": product_a, "b": product_b}


def _stock(product_id):
    return current_domain.repository_for(Product).get(product_id).stock


def _status(order_number):
    return current_domain.repository_for(Order).by_order_number(order_number).status


def _update(order_number, status):
    return current_domain.process(UpdateOrderStatus(order_number=order_number, status=status), asynchronous=False)


class TestCancelOrder:
    def test_cancel_restores_stock(self, placed):
        assert (_stock(placed["a"]), _stock(placed["b"])) == (8, 4)

        current_domain.process(
            CancelOrder(user_id=placed["user_id"], order_number=placed["order_number"]),
            asynchronous=False,
        )

        assert _status(placed["order_number"]) == "cancelled"
        assert (_stock(placed["a"]), _stock(placed["b"])) == (10, 5)

    def test_cancel_confirmed_order(self, placed):
        _update(placed["order_number"], "confirmed")
        current_domain.process(
            CancelOrder(user_id=placed["user_id"], order_number=placed["order_number"]),
            asynchronous=False,
        )
        assert _status(placed["order_number"]) == "cancelled"

    def test_cannot_cancel_once_processing(self, placed):
        _update(placed["order_number"], "confirmed")
        _update(placed["order_number"], "processing")

        with pytest.raises(ValidationError):
            current_domain.process(
                CancelOrder(user_id=placed["user_id"], order_number=placed["order_number"]),
                asynchronous=False,
            )

        assert _status(placed["order_number"]) == "processing"
        assert (_stock(placed["a"]), _stock(placed["b"])) == (8, 4)

    def test_other_users_order_is_not_found(self, placed):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                CancelOrder(user_id="someone-else", order_number=placed["order_number"]),
                asynchronous=False,
            )
        assert _status(placed["order_number"]) == "pending"

    def test_stock_is_restored_to_current_level(self, placed):
        repo = current_domain.repository_for(Product)
        product_a = repo.get(placed["a"])
        product_a.adjust_stock(20, "set")
        repo.add(product_a)

        current_domain.process(
            CancelOrder(user_id=placed["user_id"], order_number=placed["order_number"]),
            asynchronous=False,
        )

        assert _stock(placed["a"]) == 22


class TestUpdateOrderStatus:
    def test_walks_lifecycle(self, placed):
        for status in ("confirmed", "processing", "shipped", "delivered"):
            assert _update(placed["order_number"], status) == status

        order = current_domain.repository_for(Order).by_order_number(placed["order_number"])
        assert order.shipped_at is not None
        assert order.delivered_at is not None

    def test_invalid_transition(self, placed):
        with pytest.raises(ValidationError):
            _update(placed["order_number"], "shipped")
        assert _status(placed["order_number"]) == "pending"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            _update("ORD-2026-DEADBEEF", "confirmed")

    def test_admin_cancel_restocks_once(self, placed):
        _update(placed["order_number"], "cancelled")
        assert (_stock(placed["a"]), _stock(placed["b"])) == (10, 5)

        assert _update(placed["order_number"], "cancelled") == "cancelled"
        assert (_stock(placed["a"]), _stock(placed["b"])) == (10, 5)
