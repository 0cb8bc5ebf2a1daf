"""Order placement — command and handler.

Stock for every line is reserved before the order exists. A line that cannot
be covered rejects the whole order and no stock is taken.
"""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.catalog.stock import reserve_items
from storefront.domain import logger, storefront
from storefront.order.ledger import allocate_order_id
from storefront.order.order import Order
from storefront.utils.logging import add_context


@storefront.command(part_of="Order")
class PlaceOrder:
    """Check out a cart as a new pending order."""

    customer_name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    items = Text(required=True)  # JSON list of {sku, name, price, quantity, image}


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        if not items_data:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        reserve_items(items_data)

        order_id = allocate_order_id()
        add_context(order_id=order_id)
        order = Order.create(
            order_id=order_id,
            customer_name=command.customer_name,
            email=command.email,
            items_data=items_data,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            email=order.email,
            item_count=len(items_data),
            total=order.total,
        )
        return str(order.id)
