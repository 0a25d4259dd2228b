"""Back-office stock corrections and product flags — commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product, StockOperation
from storefront.domain import storefront


@storefront.command(part_of="Product")
class UpdateStock:
    product_id: Identifier(required=True)
    quantity: Integer(required=True)
    operation: String(default=StockOperation.SET.value, max_length=20)


@storefront.command(part_of="Product")
class ToggleFeatured:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class ToggleActive:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ProductStockHandler:
    @handle(UpdateStock)
    def update_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.adjust_stock(command.quantity, command.operation)
        repo.add(product)
        return product.stock

    @handle(ToggleFeatured)
    def toggle_featured(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_featured()
        repo.add(product)
        return product.is_featured

    @handle(ToggleActive)
    def toggle_active(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.toggle_active()
        repo.add(product)
        return product.is_active
