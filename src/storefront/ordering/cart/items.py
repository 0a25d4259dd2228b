"""Cart line management — commands and handler.

Every command addresses the cart by its owner; the cart is created on first
use.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.ordering.cart.cart import Cart


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


def purchasable_product(product_id):
    """Load a product that may be put in a cart. Inactive products count as missing."""
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_active:
        raise ObjectNotFoundError(f"Product {product_id} is not available")
    return product


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = purchasable_product(command.product_id)

        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        item_id = cart.add_item(product, command.quantity)
        repo.add(cart)
        return item_id

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        item = cart.find_item(command.item_id)
        product = purchasable_product(item.product_id)

        cart.update_item_quantity(command.item_id, command.quantity, product)
        repo.add(cart)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.get_or_create(command.user_id)
        cart.clear()
        repo.add(cart)
