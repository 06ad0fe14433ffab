"""Storefront bounded context — catalog, accounts, carts, checkout and orders.

A single Protean domain: checkout mutates users and products in one unit of
work, so they share a composition root.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
