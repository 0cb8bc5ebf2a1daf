"""Order aggregate (CQRS) — an order and its delivery timeline.

An order is a small state machine driven by the fulfillment simulation. Every
status change appends a TrackingEvent, so the timeline is never empty and its
last entry always carries the order's current status.

Forward progression:
    PENDING → PROCESSING → SHIPPED → OUT_FOR_DELIVERY → DELIVERED

REFUNDED and REPLACEMENT_SENT are side states, reachable only through
`force_status`. Advancing an order out of PENDING or a side state restarts the
progression at PROCESSING.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String

from storefront.domain import storefront
from storefront.order.events import (
    DiscountApplied,
    OrderPlaced,
    OrderStatusChanged,
    ReplacementOrderCreated,
    TrackingNumberAssigned,
)
from storefront.order.numbering import generate_tracking_number


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    REFUNDED = "refunded"
    REPLACEMENT_SENT = "replacement_sent"


# Each step: target status, location, description
_PROGRESSION = [
    (OrderStatus.PROCESSING, "Contoso Warehouse, Redmond WA", "Order confirmed and being prepared"),
    (OrderStatus.SHIPPED, "Redmond WA", "Package picked up by carrier"),
    (OrderStatus.OUT_FOR_DELIVERY, "Local Distribution Center", "Out for delivery"),
    (OrderStatus.DELIVERED, "Customer Address", "Package delivered successfully"),
]

# Statuses a bulk advance leaves alone
SETTLED_STATUSES = {
    OrderStatus.DELIVERED,
    OrderStatus.REFUNDED,
    OrderStatus.REPLACEMENT_SENT,
}

DEFAULT_LOCATION = "Contoso Fulfillment"


def parse_status(value: str) -> OrderStatus:
    """Coerce a status string to OrderStatus, rejecting unknown values."""
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError({"status": [f"Unknown status '{value}'. Expected one of: {allowed}"]}) from None


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A line item, snapshotted from the catalog when the order was placed."""

    sku = String(required=True, max_length=50)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=500)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


@storefront.entity(part_of="Order")
class TrackingEvent:
    """One entry in the order's delivery timeline. Never modified once added."""

    sequence = Integer(required=True, min_value=1)
    status = String(required=True, max_length=50)
    location = String(max_length=200)
    description = String(max_length=500)
    occurred_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root (CQRS)
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    items = HasMany(OrderItem)
    total = Float(default=0.0, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number = String(max_length=50)
    tracking_events = HasMany(TrackingEvent)
    discount_code = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order_id: str, customer_name: str, email: str, items_data: list[dict]):
        """Place a new pending order. Stock must already be reserved."""
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            id=order_id,
            customer_name=customer_name,
            email=email,
            status=OrderStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            order.add_items(
                OrderItem(
                    sku=item_data.get("sku"),
                    name=item_data.get("name"),
                    price=item_data.get("price"),
                    quantity=item_data.get("quantity"),
                    image=item_data.get("image"),
                )
            )
        order.total = round(sum(item.subtotal for item in order.items), 2)
        order._append_event(OrderStatus.PENDING, "Online", "Order placed successfully", now)

        order.raise_(
            OrderPlaced(
                order_id=order_id,
                customer_name=customer_name,
                email=email,
                items=json.dumps(items_data),
                item_count=len(items_data),
                total=order.total,
                placed_at=now,
            )
        )
        return order

    @classmethod
    def create_replacement(cls, order_id: str, original: "Order", tracking_number: str):
        """Issue a zero-total replacement carrying the original order's items.

        The replacement starts in PROCESSING with a two-entry timeline that
        shares a single timestamp.
        """
        now = datetime.now(UTC)
        items_data = [
            {
                "sku": item.sku,
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "image": item.image,
            }
            for item in original.items
        ]
        replacement = cls(
            id=order_id,
            customer_name=original.customer_name,
            email=original.email,
            total=0.0,
            status=OrderStatus.PROCESSING.value,
            tracking_number=tracking_number,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            replacement.add_items(OrderItem(**item_data))
        replacement._append_event(OrderStatus.PENDING, "Online", "Replacement order created", now)
        replacement._append_event(
            OrderStatus.PROCESSING, "Contoso Warehouse, Redmond WA", "Replacement being prepared", now
        )

        replacement.raise_(
            ReplacementOrderCreated(
                order_id=order_id,
                original_order_id=str(original.id),
                tracking_number=tracking_number,
                items=json.dumps(items_data),
                created_at=now,
            )
        )
        return replacement

    # -------------------------------------------------------------------
    # Timeline
    # -------------------------------------------------------------------
    def timeline(self) -> list[TrackingEvent]:
        """Tracking events in the order they were appended."""
        return sorted(self.tracking_events or [], key=lambda event: event.sequence)

    def _append_event(self, status: OrderStatus, location: str, description: str, occurred_at: datetime) -> None:
        self.add_tracking_events(
            TrackingEvent(
                sequence=len(self.tracking_events or []) + 1,
                status=status.value,
                location=location,
                description=description,
                occurred_at=occurred_at,
            )
        )

    # -------------------------------------------------------------------
    # Status changes
    # -------------------------------------------------------------------
    @property
    def is_settled(self) -> bool:
        return OrderStatus(self.status) in SETTLED_STATUSES

    def force_status(self, status: str, location: str | None = None, description: str | None = None) -> None:
        """Move the order to any status, bypassing the progression table.

        Reaching SHIPPED without a tracking number assigns one; an existing
        number is never replaced.
        """
        target = parse_status(status)
        previous = self.status
        location = location or DEFAULT_LOCATION
        description = description or f"Status updated to {target.value}"

        now = datetime.now(UTC)
        self.status = target.value
        if target == OrderStatus.SHIPPED and not self.tracking_number:
            self.tracking_number = generate_tracking_number()
            self.raise_(
                TrackingNumberAssigned(
                    order_id=str(self.id),
                    tracking_number=self.tracking_number,
                    assigned_at=now,
                )
            )
        self._append_event(target, location, description, now)
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                location=location,
                description=description,
                changed_at=now,
            )
        )

    def advance(self) -> bool:
        """Move one step along the progression. Returns False when already delivered."""
        current = OrderStatus(self.status)
        statuses = [step[0] for step in _PROGRESSION]
        position = statuses.index(current) + 1 if current in statuses else 0
        if position >= len(_PROGRESSION):
            return False

        target, location, description = _PROGRESSION[position]
        self.force_status(target.value, location, description)
        return True

    # -------------------------------------------------------------------
    # Discounts
    # -------------------------------------------------------------------
    def apply_discount(self, code: str) -> None:
        """Stamp a discount code on the order, replacing any earlier one."""
        now = datetime.now(UTC)
        self.discount_code = code
        self.updated_at = now
        self.raise_(
            DiscountApplied(
                order_id=str(self.id),
                code=code,
                applied_at=now,
            )
        )
