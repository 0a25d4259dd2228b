"""Identity elements, loaded by `storefront.init()` from this level."""

import storefront.identity.user.addresses  # noqa: F401
import storefront.identity.user.events  # noqa: F401
import storefront.identity.user.password  # noqa: F401
import storefront.identity.user.profile  # noqa: F401
import storefront.identity.user.registration  # noqa: F401
import storefront.identity.user.user  # noqa: F401
