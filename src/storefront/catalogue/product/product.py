"""Product aggregate — sellable item with a stock counter."""

from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.catalogue.product.events import (
    ProductActivationToggled,
    ProductCreated,
    ProductDetailsUpdated,
    ProductFeatureToggled,
    ProductStockChanged,
    ProductStockLow,
)
from storefront.domain import storefront
from storefront.utils.money import to_decimal

LOW_STOCK_THRESHOLD = 5


class StockOperation(Enum):
    SET = "set"
    ADD = "add"
    SUBTRACT = "subtract"


@storefront.aggregate
class Product:
    """An item offered for sale.

    Stock is never negative and price is always positive. Crossing the low-stock
    threshold from above raises `ProductStockLow` so that the back office can
    reorder before the item sells out.
    """

    name: String(required=True, max_length=255, sanitize=False)
    slug: String(required=True, max_length=280, unique=True)
    description: Text(sanitize=False)
    price: Float(required=True, min_value=0.01)
    stock: Integer(default=0, min_value=0)
    is_active: Boolean(default=True)
    is_featured: Boolean(default=False)
    category_id: Identifier(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= LOW_STOCK_THRESHOLD

    @classmethod
    def create(cls, name, slug, price, category_id, stock=0, description=None, is_featured=False):
        if stock is None or stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

        now = datetime.now()
        product = cls(
            name=name,
            slug=slug,
            description=description,
            price=float(to_decimal(price)),
            stock=stock,
            category_id=category_id,
            is_featured=bool(is_featured),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=name,
                slug=slug,
                price=product.price,
                stock=stock,
                category_id=category_id,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category_id=None):
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = float(to_decimal(price))
        if category_id is not None:
            self.category_id = category_id

        self.updated_at = datetime.now()
        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                category_id=self.category_id,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity):
        """Take `quantity` units out of stock for an order line."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
        if quantity > self.stock:
            raise ValidationError(
                {"stock": [f'Insufficient stock for "{self.name}" (requested: {quantity}, available: {self.stock})']}
            )
        self._change_stock(self.stock - quantity, reason="reserved")

    def release_stock(self, quantity):
        """Return `quantity` units to stock, e.g. from a cancelled order."""
        if quantity is None or quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
        self._change_stock(self.stock + quantity, reason="released")

    def adjust_stock(self, quantity, operation=StockOperation.SET.value):
        """Back-office stock correction."""
        try:
            op = StockOperation(operation)
        except ValueError:
            raise ValidationError({"operation": [f"Unknown stock operation: {operation}"]}) from None

        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        if op == StockOperation.SET:
            new_stock = quantity
        elif op == StockOperation.ADD:
            new_stock = self.stock + quantity
        else:
            new_stock = self.stock - quantity
            if new_stock < 0:
                raise ValidationError({"stock": ["Stock cannot be negative"]})

        self._change_stock(new_stock, reason=f"adjusted:{op.value}")

    def _change_stock(self, new_stock, reason):
        previous_stock = self.stock
        self.stock = new_stock
        self.updated_at = datetime.now()

        self.raise_(
            ProductStockChanged(
                product_id=self.id,
                previous_stock=previous_stock,
                new_stock=new_stock,
                reason=reason,
            )
        )

        if previous_stock > LOW_STOCK_THRESHOLD >= new_stock:
            self.raise_(
                ProductStockLow(
                    product_id=self.id,
                    name=self.name,
                    stock=new_stock,
                    threshold=LOW_STOCK_THRESHOLD,
                )
            )

    # -------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------
    def toggle_featured(self):
        self.is_featured = not self.is_featured
        self.updated_at = datetime.now()
        self.raise_(ProductFeatureToggled(product_id=self.id, is_featured=self.is_featured))

    def toggle_active(self):
        self.is_active = not self.is_active
        self.updated_at = datetime.now()
        self.raise_(ProductActivationToggled(product_id=self.id, is_active=self.is_active))


_SORT_KEYS = {
    "name": (lambda p: p.name.lower(), False),
    "price_asc": (lambda p: p.price, False),
    "price_desc": (lambda p: p.price, True),
    "newest": (lambda p: p.created_at, True),
}


@storefront.repository(part_of=Product)
class ProductRepository:
    def slug_taken(self, slug: str) -> bool:
        return bool(self._dao.query.filter(slug=slug).all().items)

    def active(self) -> list[Product]:
        return self._dao.query.filter(is_active=True).all().items

    def featured(self, limit: int = 8) -> list[Product]:
        products = [p for p in self.active() if p.is_featured]
        products.sort(key=lambda p: p.created_at, reverse=True)
        return products[:limit]

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
        products = [p for p in self.active() if p.stock <= threshold]
        return sorted(products, key=lambda p: p.stock)

    def similar(self, product, limit: int = 4) -> list[Product]:
        """Other active products from the same category, newest first."""
        products = [
            p for p in self.active() if str(p.category_id) == str(product.category_id) and str(p.id) != str(product.id)
        ]
        products.sort(key=lambda p: p.created_at, reverse=True)
        return products[:limit]

    def browse(
        self,
        category_id=None,
        search=None,
        featured=None,
        in_stock=None,
        min_price=None,
        max_price=None,
        sort="newest",
        page=1,
        limit=20,
    ) -> tuple[list[Product], int]:
        """Filter, sort and paginate active products. Returns the page and the total match count."""
        products = self.active()

        if category_id:
            products = [p for p in products if str(p.category_id) == str(category_id)]
        if search:
            needle = search.lower()
            products = [
                p for p in products if needle in p.name.lower() or (p.description and needle in p.description.lower())
            ]
        if featured is not None:
            products = [p for p in products if p.is_featured == featured]
        if in_stock:
            products = [p for p in products if p.in_stock]
        if min_price is not None:
            products = [p for p in products if p.price >= min_price]
        if max_price is not None:
            products = [p for p in products if p.price <= max_price]

        key, reverse = _SORT_KEYS.get(sort, _SORT_KEYS["newest"])
        products.sort(key=key, reverse=reverse)

        page = max(page, 1)
        start = (page - 1) * limit
        return products[start : start + limit], len(products)
