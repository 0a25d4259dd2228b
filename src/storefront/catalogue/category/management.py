"""Category management — commands and handler."""

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category.category import Category
from storefront.catalogue.shared.slug import unique_slug
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100, sanitize=False)
    description: Text(sanitize=False)


@storefront.command(part_of="Category")
class DeactivateCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        category = Category.create(
            name=command.name,
            slug=unique_slug(command.name, repo.slug_taken),
            description=command.description,
        )
        repo.add(category)
        return str(category.id)

    @handle(DeactivateCategory)
    def deactivate_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.deactivate()
        repo.add(category)
