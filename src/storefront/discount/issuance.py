"""Discount issuance — command and handler.

Every call produces a fresh code, even for the same order. The order is
stamped with the newest code when it exists; an unknown order id still gets
a code, which is only recorded in the registry.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.discount.discount import DEFAULT_PERCENTAGE, DiscountCode
from storefront.domain import logger, storefront
from storefront.order.numbering import generate_discount_code
from storefront.order.order import Order
from storefront.utils.logging import add_context


@storefront.command(part_of="DiscountCode")
class ApplyDiscount:
    order_id = Identifier(required=True)
    percentage = Integer(default=DEFAULT_PERCENTAGE, min_value=1, max_value=100)


def _unused_code(percentage: int) -> str:
    codes = current_domain.repository_for(DiscountCode)
    while True:
        code = generate_discount_code(percentage)
        try:
            codes.get(code)
        except ObjectNotFoundError:
            return code


@storefront.command_handler(part_of=DiscountCode)
class ApplyDiscountHandler:
    @handle(ApplyDiscount)
    def apply_discount(self, command):
        add_context(order_id=command.order_id)
        percentage = command.percentage or DEFAULT_PERCENTAGE
        discount = DiscountCode.issue(
            code=_unused_code(percentage),
            percentage=percentage,
            order_id=command.order_id,
        )
        current_domain.repository_for(DiscountCode).add(discount)

        orders = current_domain.repository_for(Order)
        try:
            order = orders.get(command.order_id)
        except ObjectNotFoundError:
            logger.warning("Discount issued for unknown order", code=discount.code)
        else:
            order.apply_discount(discount.code)
            orders.add(order)

        logger.info("Discount issued", code=discount.code, percentage=percentage)
        return {
            "code": discount.code,
            "percentage": percentage,
            "order_id": command.order_id,
        }
