"""Order domain events — immutable facts about order lifecycle changes.

Events are past tense and versioned. Item lists travel as JSON text.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer checkout created a new pending order."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_name = String(required=True)
    email = String(required=True)
    items = Text(required=True)  # JSON list of item dicts
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An order moved to a new status, either forced or by advancing."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    location = String()
    description = String()
    changed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class TrackingNumberAssigned:
    __version__ = 1

    order_id = Identifier(required=True)
    tracking_number = String(required=True)
    assigned_at = DateTime(required=True)


@storefront.event(part_of="Order")
class DiscountApplied:
    """A discount code was stamped on the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    code = String(required=True)
    applied_at = DateTime(required=True)


@storefront.event(part_of="Order")
class ReplacementOrderCreated:
    """A zero-total replacement order was issued for an earlier order."""

    __version__ = 1

    order_id = Identifier(required=True)
    original_order_id = Identifier(required=True)
    tracking_number = String(required=True)
    items = Text(required=True)  # JSON list of item dicts
    created_at = DateTime(required=True)
