"""Order notifications — confirmation, back-office notice and status updates."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.config import setting
from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.notifications.dispatch import notify
from storefront.notifications.mailer import EmailTemplate
from storefront.ordering.order.events import OrderCreated, OrderStatusChanged
from storefront.ordering.order.order import Order
from storefront.utils.money import format_amount

logger = structlog.get_logger(__name__)


def _customer(user_id):
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        logger.error("Customer not found for order notification", user_id=str(user_id))
        return None


@storefront.event_handler(part_of=Order)
class OrderNotificationHandler:
    """Emails customers and the back office about order activity."""

    @handle(OrderCreated)
    def on_order_created(self, event: OrderCreated) -> None:
        customer = _customer(event.user_id)
        if customer is None:
            return

        context = {
            "order_number": event.order_number,
            "total_price": format_amount(event.total_price),
            "item_count": event.item_count,
            "customer_name": customer.full_name,
            "customer_email": customer.email,
        }
        notify(EmailTemplate.ORDER_CONFIRMATION, customer.email, context)
        notify(EmailTemplate.ADMIN_NEW_ORDER, setting("admin_email"), context)

    @handle(OrderStatusChanged)
    def on_order_status_changed(self, event: OrderStatusChanged) -> None:
        logger.info(
            "Order status changed",
            order_number=event.order_number,
            old_status=event.old_status,
            new_status=event.new_status,
        )

        customer = _customer(event.user_id)
        if customer is None:
            return

        notify(
            EmailTemplate.ORDER_STATUS_UPDATE,
            customer.email,
            {
                "order_number": event.order_number,
                "old_status": event.old_status,
                "new_status": event.new_status,
                "customer_name": customer.full_name,
            },
        )
