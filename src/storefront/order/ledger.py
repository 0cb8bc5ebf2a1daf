"""Order ledger access shared by command handlers and queries."""

from protean.utils.globals import current_domain

from storefront.order.numbering import next_order_id, order_number
from storefront.order.order import Order


def all_orders() -> list[Order]:
    """Every order in the ledger, by ascending order number."""
    orders = current_domain.repository_for(Order)._dao.query.limit(None).all().items
    return sorted(orders, key=lambda o: (order_number(str(o.id)) or 0, str(o.id)))


def allocate_order_id() -> str:
    return next_order_id(o.id for o in all_orders())
