"""Storefront domain — catalogue, accounts, carts and orders.

A single domain keeps checkout (order creation, stock decrement and cart
clearing) inside one unit of work. Elements live two levels below this file,
so each context exposes an `elements` module that `init()` picks up.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

# Domain Composition Root
storefront = Domain(name="storefront")
