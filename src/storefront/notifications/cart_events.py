"""Abandoned cart reminder emails."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.identity.user.user import User
from storefront.notifications.dispatch import notify
from storefront.notifications.mailer import EmailTemplate
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.events import CartReminderDue

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Cart)
class CartReminderHandler:
    @handle(CartReminderDue)
    def on_cart_reminder_due(self, event: CartReminderDue) -> None:
        try:
            user = current_domain.repository_for(User).get(event.user_id)
        except ObjectNotFoundError:
            logger.error("Cart owner not found for reminder", cart_id=str(event.cart_id))
            return

        notify(
            EmailTemplate.CART_REMINDER,
            user.email,
            {"first_name": user.first_name, "item_count": event.item_count},
        )
