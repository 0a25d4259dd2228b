"""Shared BDD fixtures and step definitions for carts, checkout and addresses."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then, when
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.stock import UpdateStock
from storefront.identity.user.addresses import RemoveAddress, SetDefaultAddress
from storefront.identity.user.user import User
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.cancellation import CancelOrder
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus


@pytest.fixture()
def scenario_state():
    """Ids and outcomes carried from one step to the next."""
    return {"products": {}, "addresses": {}, "order_number": None, "error": None, "user_id": None}


def _attempt(state, command):
    state["error"] = None
    try:
        return current_domain.process(command, asynchronous=False)
    except (ValidationError, ObjectNotFoundError) as exc:
        state["error"] = exc
        return None


def _error_text(exc):
    if isinstance(exc, ObjectNotFoundError):
        return str(exc)
    messages = exc.messages
    if isinstance(messages, dict):
        return " ".join(str(m) for values in messages.values() for m in values)
    return str(messages)


def _product(state, name):
    return current_domain.repository_for(Product).get(state["products"][name])


def _cart(state):
    return current_domain.repository_for(Cart).for_user(state["user_id"])


def _user(state):
    return current_domain.repository_for(User).get(state["user_id"])


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shopper with an address")
def _(scenario_state, shopper):
    user_id, address_id = shopper
    scenario_state["user_id"] = user_id
    scenario_state["address_id"] = address_id


@given("a registered shopper")
def _(scenario_state, register_user):
    scenario_state["user_id"] = register_user()


@given(parsers.cfparse('a product "{name}" priced {price:g} with {stock:d} in stock'))
def _(scenario_state, create_product, name, price, stock):
    scenario_state["products"][name] = create_product(name=name, price=price, stock=stock)


@given(parsers.cfparse('the shopper adds the address "{street}"'))
def _(scenario_state, add_address, street):
    scenario_state["addresses"][street] = add_address(scenario_state["user_id"], street=street)


@given(parsers.cfparse('the back office sets the stock of "{name}" to {stock:d}'))
def _(scenario_state, name, stock):
    command = UpdateStock(product_id=scenario_state["products"][name], quantity=stock, operation="set")
    current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Steps usable as Given or When
# ---------------------------------------------------------------------------
@given(parsers.cfparse('the shopper adds {quantity:d} of "{name}" to the cart'))
@when(parsers.cfparse('the shopper adds {quantity:d} of "{name}" to the cart'))
def _(scenario_state, quantity, name):
    command = AddToCart(
        user_id=scenario_state["user_id"],
        product_id=scenario_state["products"][name],
        quantity=quantity,
    )
    _attempt(scenario_state, command)


@given("the shopper checks out")
@when("the shopper checks out")
def _(scenario_state):
    address_id = scenario_state["address_id"]
    command = PlaceOrder(
        user_id=scenario_state["user_id"],
        shipping_address_id=address_id,
        billing_address_id=address_id,
    )
    order_number = _attempt(scenario_state, command)
    if order_number:
        scenario_state["order_number"] = order_number


@given(parsers.cfparse('the back office moves the order to "{status}"'))
@when(parsers.cfparse('the back office moves the order to "{status}"'))
def _(scenario_state, status):
    _attempt(scenario_state, UpdateOrderStatus(order_number=scenario_state["order_number"], status=status))


@given(parsers.cfparse('the shopper removes the address "{street}"'))
@when(parsers.cfparse('the shopper removes the address "{street}"'))
def _(scenario_state, street):
    command = RemoveAddress(user_id=scenario_state["user_id"], address_id=scenario_state["addresses"][street])
    _attempt(scenario_state, command)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the shopper cancels the order")
def _(scenario_state):
    _attempt(
        scenario_state,
        CancelOrder(user_id=scenario_state["user_id"], order_number=scenario_state["order_number"]),
    )


@when(parsers.cfparse('the shopper makes "{street}" the default address'))
def _(scenario_state, street):
    command = SetDefaultAddress(user_id=scenario_state["user_id"], address_id=scenario_state["addresses"][street])
    _attempt(scenario_state, command)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the action is rejected with "{fragment}"'))
def _(scenario_state, fragment):
    assert scenario_state["error"] is not None
    assert fragment in _error_text(scenario_state["error"])


@then(parsers.cfparse('the cart holds {quantity:d} of "{name}"'))
def _(scenario_state, quantity, name):
    line = _cart(scenario_state).line_for(scenario_state["products"][name])
    assert line is not None
    assert line.quantity == quantity


@then(parsers.cfparse("the cart has {count:d} line"))
def _(scenario_state, count):
    assert len(_cart(scenario_state).items) == count


@then(parsers.cfparse("the cart still holds {count:d} items"))
def _(scenario_state, count):
    assert _cart(scenario_state).total_quantity == count


@then("the cart is empty")
def _(scenario_state):
    assert _cart(scenario_state).is_empty


@then(parsers.cfparse('the stock of "{name}" is {stock:d}'))
def _(scenario_state, name, stock):
    assert _product(scenario_state, name).stock == stock


@then(parsers.cfparse('the order status is "{status}"'))
def _(scenario_state, status):
    order = current_domain.repository_for(Order).by_order_number(scenario_state["order_number"])
    assert order.status == status


@then(parsers.cfparse("the order total is {total:g}"))
def _(scenario_state, total):
    order = current_domain.repository_for(Order).by_order_number(scenario_state["order_number"])
    assert order.total_price == total


@then("no order was placed")
def _(scenario_state):
    assert current_domain.repository_for(Order).for_user(scenario_state["user_id"]) == []


@then(parsers.cfparse('"{street}" is the only default address'))
def _(scenario_state, street):
    defaults = [a for a in _user(scenario_state).addresses if a.is_default]
    assert [a.street for a in defaults] == [street]
