"""Catalog domain events — stock movements on products."""

from protean.fields import DateTime, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class StockDecremented:
    """Units of a product were taken out of stock for an order."""

    __version__ = 1

    sku = String(required=True)
    quantity = Integer(required=True)
    remaining_stock = Integer(required=True)
    decremented_at = DateTime(required=True)


@storefront.event(part_of="Product")
class LowStockDetected:
    """Stock fell below the low-stock threshold after a decrement."""

    __version__ = 1

    sku = String(required=True)
    name = String(required=True)
    remaining_stock = Integer(required=True)
    threshold = Integer(required=True)
    detected_at = DateTime(required=True)
