"""Application tests for status override and simulation commands."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.order.creation import PlaceOrder
from storefront.order.order import Order
from storefront.order.simulation import AdvanceAllOrders, AdvanceOrder
from storefront.order.status import SetOrderStatus


def _create_order(make_product, sku="SKU-A"):
    make_product(sku, stock=50)
    items = json.dumps([{"sku": sku, "name": "Product", "price": 10.0, "quantity": 1}])
    return current_domain.process(
        PlaceOrder(customer_name="Adele Vance", email="adele.vance@contoso.com", items=items),
        asynchronous=False,
    )


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestSetOrderStatus:
    def test_sets_status(self, make_product):
        order_id = _create_order(make_product)
        current_domain.process(SetOrderStatus(order_id=order_id, status="refunded"), asynchronous=False)
        order = _get(order_id)
        assert order.status == "refunded"
        assert order.timeline()[-1].description == "Status updated to refunded"

    def test_shipped_assigns_tracking_number(self, make_product):
        order_id = _create_order(make_product)
        current_domain.process(SetOrderStatus(order_id=order_id, status="shipped"), asynchronous=False)
        assert _get(order_id).tracking_number.startswith("TRK-")

    def test_custom_location(self, make_product):
        order_id = _create_order(make_product)
        current_domain.process(
            SetOrderStatus(order_id=order_id, status="processing", location="Dock 4", description="Expedited"),
            asynchronous=False,
        )
        event = _get(order_id).timeline()[-1]
        assert (event.location, event.description) == ("Dock 4", "Expedited")

    def test_unknown_status(self, make_product):
        order_id = _create_order(make_product)
        with pytest.raises(ValidationError):
            current_domain.process(SetOrderStatus(order_id=order_id, status="teleported"), asynchronous=False)
        assert _get(order_id).status == "pending"

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(SetOrderStatus(order_id="ORD-9999", status="shipped"), asynchronous=False)


class TestAdvanceOrder:
    def test_advance_persists(self, make_product):
        order_id = _create_order(make_product)
        current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        order = _get(order_id)
        assert order.status == "processing"
        assert len(order.tracking_events) == 2

    def test_advance_through_delivery_then_no_op(self, make_product):
        order_id = _create_order(make_product)
        for _ in range(6):
            current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
        order = _get(order_id)
        assert order.status == "delivered"
        assert [e.status for e in order.timeline()] == [
            "pending",
            "processing",
            "shipped",
            "out_for_delivery",
            "delivered",
        ]

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(AdvanceOrder(order_id="ORD-9999"), asynchronous=False)


class TestAdvanceAllOrders:
    def test_skips_settled_orders(self, make_product):
        open_id = _create_order(make_product, "SKU-A")
        delivered_id = _create_order(make_product, "SKU-B")
        refunded_id = _create_order(make_product, "SKU-C")
        replaced_id = _create_order(make_product, "SKU-D")
        current_domain.process(SetOrderStatus(order_id=delivered_id, status="delivered"), asynchronous=False)
        current_domain.process(SetOrderStatus(order_id=refunded_id, status="refunded"), asynchronous=False)
        current_domain.process(SetOrderStatus(order_id=replaced_id, status="replacement_sent"), asynchronous=False)
        settled_counts = {oid: len(_get(oid).tracking_events) for oid in (delivered_id, refunded_id, replaced_id)}

        advanced = current_domain.process(AdvanceAllOrders(), asynchronous=False)

        assert [str(order.id) for order in advanced] == [open_id]
        assert _get(open_id).status == "processing"
        assert _get(delivered_id).status == "delivered"
        assert _get(refunded_id).status == "refunded"
        assert _get(replaced_id).status == "replacement_sent"
        assert {oid: len(_get(oid).tracking_events) for oid in settled_counts} == settled_counts

    def test_empty_ledger(self):
        assert current_domain.process(AdvanceAllOrders(), asynchronous=False) == []

    def test_seed_orders(self, seeded):
        advanced = current_domain.process(AdvanceAllOrders(), asynchronous=False)
        assert [(str(order.id), order.status) for order in advanced] == [
            ("ORD-1001", "out_for_delivery"),
            ("ORD-1003", "shipped"),
        ]
        assert all(isinstance(order, Order) for order in advanced)
        assert advanced[0].timeline()[-1].status == "out_for_delivery"
        assert _get("ORD-1001").status == "out_for_delivery"
        assert _get("ORD-1003").status == "shipped"
