"""Abandoned cart reminders — command and handler.

Meant to be triggered periodically by an external scheduler. A cart qualifies
when it has lines, has not been touched for `idle_hours`, and has not been
reminded since its last change.
"""

from datetime import UTC, datetime, timedelta

import structlog
from protean import handle
from protean.fields import DateTime, Integer
from protean.utils.globals import current_domain

from storefront.config import setting
from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart

logger = structlog.get_logger(__name__)


def _as_naive_utc(value):
    if value.tzinfo is not None:
        value = value.astimezone(UTC).replace(tzinfo=None)
    return value


@storefront.command(part_of="Cart")
class SendAbandonedCartReminders:
    idle_hours = Integer(min_value=1)
    as_of = DateTime()  # Optional: defaults to now


@storefront.command_handler(part_of=Cart)
class AbandonedCartHandler:
    @handle(SendAbandonedCartReminders)
    def send_reminders(self, command):
        as_of = command.as_of or datetime.now(UTC)
        idle_hours = command.idle_hours or int(setting("abandoned_cart_idle_hours"))
        cutoff = _as_naive_utc(as_of - timedelta(hours=idle_hours))

        logger.info("Checking for abandoned carts", cutoff=cutoff.isoformat(), idle_hours=idle_hours)

        repo = current_domain.repository_for(Cart)
        flagged = 0
        for cart in repo.all_carts():
            if cart.is_empty or cart.reminder_sent_at or not cart.updated_at:
                continue
            if _as_naive_utc(cart.updated_at) > cutoff:
                continue

            cart.flag_for_reminder(as_of)
            repo.add(cart)
            flagged += 1

        logger.info("Abandoned cart reminders queued", count=flagged)
        return flagged
