"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    slug: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """Descriptive or pricing details of a product changed."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    price: Float(required=True)
    category_id: Identifier(required=True)


@storefront.event(part_of="Product")
class ProductStockChanged:
    """The stock counter of a product moved."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_stock: Integer(required=True)
    new_stock: Integer(required=True)
    reason: String(required=True)


@storefront.event(part_of="Product")
class ProductStockLow:
    """Stock dropped to or below the low-stock threshold."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True, sanitize=False)
    stock: Integer(required=True)
    threshold: Integer(required=True)


@storefront.event(part_of="Product")
class ProductFeatureToggled:
    __version__ = 1

    product_id: Identifier(required=True)
    is_featured: Boolean(required=True)


@storefront.event(part_of="Product")
class ProductActivationToggled:
    __version__ = 1

    product_id: Identifier(required=True)
    is_active: Boolean(required=True)
