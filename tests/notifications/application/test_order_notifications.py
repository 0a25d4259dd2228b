"""Emails triggered by catalogue, account and order activity."""

import pytest
from protean import current_domain
from storefront.catalogue.product.product import Product
from storefront.ordering.cart.items import AddToCart
from storefront.ordering.order.order import Order
from storefront.ordering.order.placement import PlaceOrder
from storefront.ordering.order.status import UpdateOrderStatus

ADMIN_EMAIL = "admin@storefront.test"
CUSTOMER_EMAIL = "jane.doe@example.com"


@pytest.fixture()
def checkout(shopper, create_product):
    user_id, address_id = shopper

    def _checkout(stock=10, quantity=2):
        product_id = create_product(name="Shirt", price=19.99, stock=stock)
        current_domain.process(AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False)
        return current_domain.process(
            PlaceOrder(user_id=user_id, shipping_address_id=address_id, billing_address_id=address_id),
            asynchronous=False,
        )

    return _checkout


class TestOrderEmails:
    def test_confirmation_sent_to_customer(self, checkout, mailer):
        order_number = checkout()

        [email] = mailer.sent_to(CUSTOMER_EMAIL, "order_confirmation")
        assert order_number in email["subject"]
        assert "39.98" in email["body"]

    def test_back_office_notified(self, checkout, mailer):
        order_number = checkout()

        [email] = mailer.sent_to(ADMIN_EMAIL, "admin_new_order")
        assert order_number in email["subject"]
        assert CUSTOMER_EMAIL in email["body"]

    def test_status_update_sent(self, checkout, mailer):
        order_number = checkout()

        current_domain.process(UpdateOrderStatus(order_number=order_number, status="confirmed"), asynchronous=False)

        [email] = mailer.sent_to(CUSTOMER_EMAIL, "order_status_update")
        assert "confirmed" in email["subject"]

    def test_same_status_sends_nothing(self, checkout, mailer):
        order_number = checkout()
        current_domain.process(UpdateOrderStatus(order_number=order_number, status="confirmed"), asynchronous=False)
        current_domain.process(UpdateOrderStatus(order_number=order_number, status="confirmed"), asynchronous=False)

        assert len(mailer.sent_to(CUSTOMER_EMAIL, "order_status_update")) == 1


class TestLowStockAlert:
    def test_alert_when_checkout_crosses_threshold(self, checkout, mailer):
        checkout(stock=6, quantity=2)

        [email] = mailer.sent_to(ADMIN_EMAIL, "low_stock_alert")
        assert email["subject"] == "Low stock: Shirt"
        assert "4 unit(s)" in email["body"]

    def test_no_alert_above_threshold(self, checkout, mailer):
        checkout(stock=20, quantity=2)
        assert mailer.sent_to(ADMIN_EMAIL, "low_stock_alert") == []


class TestDeliveryFailures:
    def test_rejected_email_does_not_fail_checkout(self, checkout, mailer):
        mailer.configure(should_succeed=False)

        order_number = checkout(stock=10, quantity=2)

        order = current_domain.repository_for(Order).by_order_number(order_number)
        assert order is not None
        product = current_domain.repository_for(Product).get(order.items[0].product_id)
        assert product.stock == 8
        assert mailer.sent_to(CUSTOMER_EMAIL, "order_confirmation") == []
        assert mailer.sent_to(ADMIN_EMAIL, "admin_new_order") == []

    def test_crashing_mailer_does_not_fail_checkout(self, checkout):
        from storefront.notifications import set_mailer
        from storefront.notifications.mailer import MailerPort

        class BrokenMailer(MailerPort):
            def send(self, template, recipient, context):
                raise ConnectionError("SMTP server unreachable")

        set_mailer(BrokenMailer())

        assert checkout().startswith("ORD-")
