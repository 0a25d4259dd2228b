"""Low stock alerts for the back office."""

import structlog
from protean.utils.mixins import handle

from storefront.catalogue.product.events import ProductStockLow
from storefront.catalogue.product.product import Product
from storefront.config import setting
from storefront.domain import storefront
from storefront.notifications.dispatch import notify
from storefront.notifications.mailer import EmailTemplate

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Product)
class StockAlertHandler:
    @handle(ProductStockLow)
    def on_product_stock_low(self, event: ProductStockLow) -> None:
        logger.warning(
            "Product stock is low",
            product_id=str(event.product_id),
            product_name=event.name,
            stock=event.stock,
            threshold=event.threshold,
        )
        notify(
            EmailTemplate.LOW_STOCK_ALERT,
            setting("admin_email"),
            {"product_name": event.name, "stock": event.stock, "threshold": event.threshold},
        )
