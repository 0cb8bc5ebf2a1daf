"""Product aggregate — a sellable catalog entry and its on-hand stock.

Products are seeded at startup and never deleted. The only mutation the
engine performs on them is a stock decrement while placing an order or
issuing a replacement, so stock can never be driven below zero.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String, Text

from storefront.catalog.events import LowStockDetected, StockDecremented
from storefront.domain import storefront

LOW_STOCK_THRESHOLD = 5


class InsufficientStock(ValidationError):
    """Raised when a product cannot cover the requested quantity.

    Carries the offending SKU, its name, the units available and the units
    requested so callers can explain the rejection.
    """

    def __init__(self, sku, name, available, requested):
        self.sku = sku
        self.name = name
        self.available = available
        self.requested = requested
        super().__init__(
            {"stock": [f'Insufficient stock for "{name}" (SKU: {sku}). Available: {available}, Requested: {requested}']}
        )

    @property
    def message(self) -> str:
        return self.messages["stock"][0]


@storefront.aggregate
class Product:
    sku = String(identifier=True, max_length=50)
    name = String(required=True, max_length=255)
    description = Text()
    price = Float(required=True, min_value=0.0)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100)
    image = String(max_length=500)

    @property
    def is_in_stock(self) -> bool:
        return self.stock > 0

    @property
    def is_low_stock(self) -> bool:
        return 0 < self.stock < LOW_STOCK_THRESHOLD

    def has_stock(self, quantity: int) -> bool:
        return self.stock >= quantity

    def decrement_stock(self, quantity: int) -> None:
        """Take `quantity` units out of stock.

        Raises InsufficientStock, leaving stock untouched, when fewer units
        are on hand than requested.
        """
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.has_stock(quantity):
            raise InsufficientStock(self.sku, self.name, self.stock, quantity)

        now = datetime.now(UTC)
        self.stock -= quantity
        self.raise_(
            StockDecremented(
                sku=self.sku,
                quantity=quantity,
                remaining_stock=self.stock,
                decremented_at=now,
            )
        )
        if self.stock < LOW_STOCK_THRESHOLD:
            self.raise_(
                LowStockDetected(
                    sku=self.sku,
                    name=self.name,
                    remaining_stock=self.stock,
                    threshold=LOW_STOCK_THRESHOLD,
                    detected_at=now,
                )
            )
