"""DiscountCode aggregate — a percentage-off code issued against an order.

Codes are write-once: they are recorded when issued and never change. The
order id is kept as a plain reference and is not required to resolve.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront

DEFAULT_PERCENTAGE = 20


@storefront.event(part_of="DiscountCode")
class DiscountCodeIssued:
    """A new discount code was generated."""

    __version__ = 1

    code = String(required=True)
    percentage = Integer(required=True)
    order_id = Identifier(required=True)
    issued_at = DateTime(required=True)


@storefront.aggregate
class DiscountCode:
    code = String(identifier=True, max_length=50)
    percentage = Integer(required=True, min_value=1, max_value=100)
    order_id = Identifier(required=True)
    created_at = DateTime()

    @classmethod
    def issue(cls, code: str, percentage: int, order_id: str):
        now = datetime.now(UTC)
        discount = cls(
            code=code,
            percentage=percentage,
            order_id=order_id,
            created_at=now,
        )
        discount.raise_(
            DiscountCodeIssued(
                code=code,
                percentage=percentage,
                order_id=order_id,
                issued_at=now,
            )
        )
        return discount
