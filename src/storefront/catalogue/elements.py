"""Catalogue elements, loaded by `storefront.init()` from this level."""

import storefront.catalogue.category.category  # noqa: F401
import storefront.catalogue.category.events  # noqa: F401
import storefront.catalogue.category.management  # noqa: F401
import storefront.catalogue.product.creation  # noqa: F401
import storefront.catalogue.product.events  # noqa: F401
import storefront.catalogue.product.product  # noqa: F401
import storefront.catalogue.product.stock  # noqa: F401
