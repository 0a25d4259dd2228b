"""Guest cart merge at login — command and handler.

Lines collected while the shopper was anonymous are folded into the user's
cart. A line that cannot be added (unknown or inactive product, not enough
stock, bad quantity) is skipped; the rest of the merge goes ahead.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart
from storefront.ordering.cart.items import purchasable_product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class MergeGuestCart:
    """Merge anonymous cart lines into the user's cart."""

    user_id = Identifier(required=True)
    items = Text(required=True, sanitize=False)  # JSON array of {"product_id": ..., "quantity": ...}


@storefront.command_handler(part_of=Cart)
class MergeGuestCartHandler:
    @handle(MergeGuestCart)
    def merge_guest_cart(self, command):
        try:
            lines = json.loads(command.items)
        except json.JSONDecodeError:
            raise ValidationError({"items": ["Guest cart items must be a JSON array"]}) from None
        if not isinstance(lines, list):
            raise ValidationError({"items": ["Guest cart items must be a JSON array"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)

        merged = 0
        skipped = 0
        for line in lines:
            product_id = line.get("product_id") if isinstance(line, dict) else None
            try:
                if not product_id:
                    raise ValidationError({"product_id": ["Missing product id"]})
                product = purchasable_product(product_id)
                cart.add_item(product, int(line.get("quantity", 0)))
                merged += 1
            except (ObjectNotFoundError, ValidationError, TypeError, ValueError) as exc:
                skipped += 1
                logger.warning(
                    "Skipped guest cart line during merge",
                    user_id=str(command.user_id),
                    product_id=str(product_id),
                    error=str(exc),
                )

        cart.record_merge(merged_count=merged, skipped_count=skipped)
        repo.add(cart)
        return merged
