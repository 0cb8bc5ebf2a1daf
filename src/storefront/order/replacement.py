"""Replacement issuance — command and handler.

A replacement re-ships the original order's items at no charge. Stock for all
items is reserved up front; if any item is short the original order is left
untouched. Products that end up below the low-stock threshold are reported
back so the caller can raise an alert.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalog.product import LOW_STOCK_THRESHOLD
from storefront.catalog.stock import reserve_items
from storefront.domain import logger, storefront
from storefront.order.ledger import allocate_order_id
from storefront.order.numbering import generate_replacement_tracking_number
from storefront.order.order import Order, OrderStatus
from storefront.utils.logging import add_context


@storefront.command(part_of="Order")
class TriggerReplacement:
    """Issue a free replacement for an existing order."""

    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class ReplacementHandler:
    @handle(TriggerReplacement)
    def trigger_replacement(self, command):
        add_context(order_id=command.order_id)
        repo = current_domain.repository_for(Order)
        original = repo.get(command.order_id)

        products = reserve_items(
            [{"sku": item.sku, "name": item.name, "quantity": item.quantity} for item in original.items]
        )
        low_stock_alerts = [
            {"sku": product.sku, "name": product.name, "remaining_stock": product.stock}
            for product in products
            if product.stock < LOW_STOCK_THRESHOLD
        ]

        original.force_status(
            OrderStatus.REPLACEMENT_SENT.value,
            "Contoso HQ",
            "Replacement order initiated",
        )
        repo.add(original)

        tracking_number = generate_replacement_tracking_number()
        replacement = Order.create_replacement(
            order_id=allocate_order_id(),
            original=original,
            tracking_number=tracking_number,
        )
        repo.add(replacement)

        logger.info(
            "Replacement issued",
            new_order_id=str(replacement.id),
            tracking_number=tracking_number,
            low_stock_skus=[alert["sku"] for alert in low_stock_alerts],
        )
        for alert in low_stock_alerts:
            logger.warning("Low stock after replacement", **alert)

        return {
            "success": True,
            "original_order_id": str(original.id),
            "new_order_id": str(replacement.id),
            "tracking_number": tracking_number,
            "low_stock_alerts": low_stock_alerts,
        }
