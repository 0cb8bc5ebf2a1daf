"""Manual status override — command and handler.

Any status can be set regardless of the progression table. Support staff and
the assistant use it for refunds and corrections.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.order.order import Order
from storefront.utils.logging import add_context


@storefront.command(part_of="Order")
class SetOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=50)
    location = String(max_length=200)
    description = String(max_length=500)


@storefront.command_handler(part_of=Order)
class SetOrderStatusHandler:
    @handle(SetOrderStatus)
    def set_status(self, command):
        add_context(order_id=command.order_id)
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous = order.status
        order.force_status(command.status, command.location, command.description)
        repo.add(order)

        logger.info(
            "Order status set",
            previous_status=previous,
            new_status=order.status,
            tracking_number=order.tracking_number,
        )
        return str(order.id)
