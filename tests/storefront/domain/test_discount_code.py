"""Tests for the DiscountCode aggregate."""

import pytest
from protean.exceptions import ValidationError
from storefront.discount.discount import DiscountCode, DiscountCodeIssued


class TestDiscountCode:
    def test_issue(self):
        discount = DiscountCode.issue(code="CONTOSO20-11111", percentage=20, order_id="ORD-1001")
        assert discount.code == "CONTOSO20-11111"
        assert discount.percentage == 20
        assert discount.order_id == "ORD-1001"
        assert discount.created_at is not None

    def test_issue_raises_event(self):
        discount = DiscountCode.issue(code="CONTOSO20-11111", percentage=20, order_id="ORD-1001")
        issued = [e for e in discount._events if isinstance(e, DiscountCodeIssued)]
        assert len(issued) == 1
        assert issued[0].code == "CONTOSO20-11111"

    @pytest.mark.parametrize("percentage", [0, 101])
    def test_percentage_out_of_range(self, percentage):
        with pytest.raises(ValidationError):
            DiscountCode.issue(code="CONTOSO0-11111", percentage=percentage, order_id="ORD-1001")

    def test_order_id_required(self):
        with pytest.raises(ValidationError):
            DiscountCode.issue(code="CONTOSO20-11111", percentage=20, order_id=None)
