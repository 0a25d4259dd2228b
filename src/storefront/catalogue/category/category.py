"""Category aggregate for grouping products."""

from datetime import datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, Text

from storefront.catalogue.category.events import CategoryCreated, CategoryDeactivated
from storefront.domain import storefront


@storefront.aggregate
class Category:
    """A flat grouping of products. Only active categories accept new products."""

    name: String(required=True, max_length=100, sanitize=False)
    slug: String(required=True, max_length=120, unique=True)
    description: Text(sanitize=False)
    is_active: Boolean(default=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @classmethod
    def create(cls, name, slug, description=None):
        now = datetime.now()
        category = cls(
            name=name,
            slug=slug,
            description=description,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=slug,
            )
        )
        return category

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Category is already inactive"]})

        self.is_active = False
        self.updated_at = datetime.now()
        self.raise_(CategoryDeactivated(category_id=self.id))


@storefront.repository(part_of=Category)
class CategoryRepository:
    def active(self) -> list[Category]:
        categories = self._dao.query.filter(is_active=True).all().items
        return sorted(categories, key=lambda c: c.name.lower())

    def slug_taken(self, slug: str) -> bool:
        return bool(self._dao.query.filter(slug=slug).all().items)
