import json

from protean import current_domain
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.cart.merge import MergeGuestCart

USER_ID = "user-001"


def _merge(lines):
    return current_domain.process(
        MergeGuestCart(user_id=USER_ID, items=json.dumps(lines)),
        asynchronous=False,
    )


def _cart():
    return current_domain.repository_for(Cart).for_user(USER_ID)


class TestMergeGuestCart:
    def test_merge_into_new_cart(self, create_product):
        shirt = create_product(name="Shirt", stock=10)
        mug = create_product(name="Mug", stock=10)

        merged = _merge([{"product_id": shirt, "quantity": 2}, {"product_id": mug, "quantity": 1}])

        assert merged == 2
        assert _cart().total_quantity == 3

    def test_merge_adds_to_existing_lines(self, create_product):
        shirt = create_product(name="Shirt", stock=10)
        current_domain.process(AddToCart(user_id=USER_ID, product_id=shirt, quantity=2), asynchronous=False)

        _merge([{"product_id": shirt, "quantity": 3}])

        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_failing_lines_are_skipped(self, create_product):
        shirt = create_product(name="Shirt", stock=10)
        scarce = create_product(name="Scarce", stock=1)

        merged = _merge(
            [
                {"product_id": shirt, "quantity": 1},
                {"product_id": "missing", "quantity": 1},
                {"product_id": scarce, "quantity": 5},
                {"product_id": shirt, "quantity": 0},
                {"quantity": 1},
            ]
        )

        assert merged == 1
        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 1

    def test_empty_guest_cart(self):
        assert _merge([]) == 0
