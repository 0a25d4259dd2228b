"""Product creation and detail maintenance — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.product.product import Product
from storefront.catalogue.shared.slug import unique_slug
from storefront.domain import storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255, sanitize=False)
    description: Text(sanitize=False)
    price: Float(required=True)
    stock: Integer(default=0)
    category_id: Identifier(required=True)
    is_featured: Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    name: String(max_length=255, sanitize=False)
    description: Text(sanitize=False)
    price: Float()
    category_id: Identifier()


def _active_category(category_id):
    category = current_domain.repository_for(Category).get(category_id)
    if not category.is_active:
        raise ObjectNotFoundError(f"Category {category_id} is not available")
    return category


@storefront.command_handler(part_of=Product)
class ProductCatalogueHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _active_category(command.category_id)

        repo = current_domain.repository_for(Product)
        product = Product.create(
            name=command.name,
            slug=unique_slug(command.name, repo.slug_taken),
            description=command.description,
            price=command.price,
            stock=command.stock,
            category_id=command.category_id,
            is_featured=command.is_featured,
        )
        repo.add(product)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        if command.category_id:
            _active_category(command.category_id)

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category_id=command.category_id,
        )
        repo.add(product)
