"""Cart and order elements, loaded by `storefront.init()` from this level."""

import storefront.ordering.cart.cart  # noqa: F401
import storefront.ordering.cart.events  # noqa: F401
import storefront.ordering.cart.items  # noqa: F401
import storefront.ordering.cart.merge  # noqa: F401
import storefront.ordering.cart.reminders  # noqa: F401
import storefront.ordering.order.cancellation  # noqa: F401
import storefront.ordering.order.events  # noqa: F401
import storefront.ordering.order.order  # noqa: F401
import storefront.ordering.order.placement  # noqa: F401
import storefront.ordering.order.status  # noqa: F401
