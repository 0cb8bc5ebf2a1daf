"""Storefront bounded context — Catalog, Order Ledger and Discount Registry.

The domain is the composition root of the fulfillment simulation engine: its
repositories are the three stores (products, orders, discount codes) and its
command handlers are the only code that mutates them. Everything runs on
Protean's in-memory providers, so state lives for the lifetime of the process.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
