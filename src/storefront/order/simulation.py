"""Fulfillment simulation — advance one order, or every open order, a step.

Advancing follows the forward progression only. A delivered order is left as
it is, and a bulk advance skips delivered, refunded and replaced orders. The
bulk form returns the orders it moved, in their updated state.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.ledger import all_orders
from storefront.order.order import Order
from storefront.utils.logging import add_context


@storefront.command(part_of="Order")
class AdvanceOrder:
    """Move an order to its next delivery stage."""

    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class AdvanceAllOrders:
    """Move every open order one stage forward."""


@storefront.command_handler(part_of=Order)
class SimulationHandler:
    @handle(AdvanceOrder)
    def advance_order(self, command):
        add_context(order_id=command.order_id)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        if order.advance():
            repo.add(order)
            logger.info(
                "Order advanced",
                previous_status=previous,
                new_status=order.status,
            )
        else:
            logger.debug("Order already delivered")
        return str(order.id)

    @handle(AdvanceAllOrders)
    def advance_all_orders(self, command):
        repo = current_domain.repository_for(Order)
        advanced = []
        for order in all_orders():
            if order.is_settled:
                continue
            if order.advance():
                repo.add(order)
                advanced.append(order)

        logger.info("Orders advanced", count=len(advanced), order_ids=[str(o.id) for o in advanced])
        return advanced
