"""Order queries — read-only snapshots of the order ledger.

Snapshots are plain dicts with ISO-8601 timestamps. Lookups by id raise
ObjectNotFoundError, which is distinct from an empty result list.
"""

from protean.utils.globals import current_domain

from storefront.order.ledger import all_orders
from storefront.order.order import Order, TrackingEvent


def _iso(value):
    return value.isoformat() if value else None


def tracking_event_snapshot(event: TrackingEvent) -> dict:
    return {
        "status": event.status,
        "timestamp": _iso(event.occurred_at),
        "location": event.location,
        "description": event.description,
    }


def order_snapshot(order: Order) -> dict:
    return {
        "id": str(order.id),
        "customer_name": order.customer_name,
        "email": order.email,
        "items": [
            {
                "sku": item.sku,
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "image": item.image,
            }
            for item in order.items or []
        ],
        "total": order.total,
        "status": order.status,
        "created_at": _iso(order.created_at),
        "updated_at": _iso(order.updated_at),
        "tracking_number": order.tracking_number,
        "tracking_events": [tracking_event_snapshot(event) for event in order.timeline()],
        "discount_code": order.discount_code,
    }


def get_orders() -> list[dict]:
    return [order_snapshot(order) for order in all_orders()]


def get_order(order_id: str) -> dict:
    return order_snapshot(current_domain.repository_for(Order).get(order_id))


def get_orders_by_email(email: str) -> list[dict]:
    """Orders placed with `email`, compared case-insensitively."""
    wanted = (email or "").strip().lower()
    return [order_snapshot(order) for order in all_orders() if (order.email or "").lower() == wanted]


def get_tracking(order_id: str) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    return {
        "order_id": str(order.id),
        "status": order.status,
        "tracking_number": order.tracking_number,
        "events": [tracking_event_snapshot(event) for event in order.timeline()],
    }
