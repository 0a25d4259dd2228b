"""Application tests for cart line commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.stock import ToggleActive
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.ordering.cart.stock import validate_cart_stock
from storefront.ordering.cart.summary import summarize_cart

USER_ID = "user-001"


def _add(product_id, quantity):
    return current_domain.process(
        AddToCart(user_id=USER_ID, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _cart():
    return current_domain.repository_for(Cart).for_user(USER_ID)


class TestAddToCart:
    def test_first_add_creates_cart(self, create_product):
        product_id = create_product(stock=10)
        assert current_domain.repository_for(Cart).for_user(USER_ID) is None

        _add(product_id, 2)

        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_repeat_add_merges(self, create_product):
        product_id = create_product(stock=10)
        first = _add(product_id, 2)
        second = _add(product_id, 3)

        assert first == second
        cart = _cart()
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5

    def test_merged_quantity_over_stock_rejected(self, create_product):
        product_id = create_product(stock=5)
        _add(product_id, 3)

        with pytest.raises(ValidationError) as exc:
            _add(product_id, 3)

        assert "Insufficient stock" in exc.value.messages["stock"][0]
        assert _cart().items[0].quantity == 3

    def test_adding_does_not_reserve_stock(self, create_product):
        product_id = create_product(stock=5)
        _add(product_id, 3)
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _add("missing", 1)

    def test_inactive_product(self, create_product):
        product_id = create_product()
        current_domain.process(ToggleActive(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _add(product_id, 1)

    def test_carts_are_per_user(self, create_product):
        product_id = create_product()
        _add(product_id, 1)
        current_domain.process(AddToCart(user_id="user-002", product_id=product_id, quantity=4), asynchronous=False)

        repo = current_domain.repository_for(Cart)
        assert repo.for_user(USER_ID).total_quantity == 1
        assert repo.for_user("user-002").total_quantity == 4


class TestChangeLines:
    def test_update_quantity(self, create_product):
        item_id = _add(create_product(stock=10), 1)
        current_domain.process(UpdateCartItem(user_id=USER_ID, item_id=item_id, quantity=6), asynchronous=False)
        assert _cart().items[0].quantity == 6

    def test_update_over_stock(self, create_product):
        item_id = _add(create_product(stock=3), 1)
        with pytest.raises(ValidationError):
            current_domain.process(UpdateCartItem(user_id=USER_ID, item_id=item_id, quantity=4), asynchronous=False)

    def test_remove(self, create_product):
        item_id = _add(create_product(name="Shirt"), 1)
        _add(create_product(name="Mug"), 1)

        current_domain.process(RemoveFromCart(user_id=USER_ID, item_id=item_id), asynchronous=False)

        assert len(_cart().items) == 1

    def test_remove_unknown_item(self, create_product):
        _add(create_product(), 1)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveFromCart(user_id=USER_ID, item_id="missing"), asynchronous=False)

    def test_clear(self, create_product):
        _add(create_product(name="Shirt"), 1)
        _add(create_product(name="Mug"), 2)

        current_domain.process(ClearCart(user_id=USER_ID), asynchronous=False)

        assert _cart().is_empty is True


class TestCartReads:
    def test_summary_prices_against_catalogue(self, create_product):
        _add(create_product(name="Shirt", price=19.99, stock=10), 2)
        _add(create_product(name="Mug", price=7.5, stock=10), 1)

        summary = summarize_cart(_cart())

        assert summary["total_items"] == 2
        assert summary["total_quantity"] == 3
        assert summary["total_price"] == 47.48
        assert summary["is_empty"] is False

    def test_validation_reports_stock_drops(self, create_product):
        product_id = create_product(name="Shirt", stock=5)
        _add(product_id, 4)

        repo = current_domain.repository_for(Product)
        product = repo.get(product_id)
        product.adjust_stock(2, "set")
        repo.add(product)

        assert validate_cart_stock(_cart()) == ['Insufficient stock for "Shirt" (requested: 4, available: 2)']

    def test_validation_reports_inactive_products(self, create_product):
        product_id = create_product(name="Shirt")
        _add(product_id, 1)
        current_domain.process(ToggleActive(product_id=product_id), asynchronous=False)

        assert validate_cart_stock(_cart()) == ['Product "Shirt" is no longer available']
