"""Application tests for the read-only order and stock queries."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from storefront.order.simulation import AdvanceOrder
from storefront.queries.orders import get_order, get_orders, get_orders_by_email, get_tracking
from storefront.queries.stock import check_stock_status, get_products, low_stock_alert


class TestOrderQueries:
    def test_get_orders_in_number_order(self, seeded):
        assert [o["id"] for o in get_orders()] == ["ORD-1001", "ORD-1002", "ORD-1003"]

    def test_get_orders_empty(self):
        assert get_orders() == []

    def test_get_order_snapshot(self, seeded):
        order = get_order("ORD-1002")
        assert order["customer_name"] == "Adele Vance"
        assert order["status"] == "delivered"
        assert order["tracking_number"] == "TRK-5930284"
        assert {i["sku"] for i in order["items"]} == {"SL5-001", "SE2-005"}
        assert order["total"] == pytest.approx(1299.99 + 199.99)
        assert isinstance(order["created_at"], str)

    def test_get_order_not_found(self, seeded):
        with pytest.raises(ObjectNotFoundError):
            get_order("ORD-9999")

    def test_orders_by_email_is_case_insensitive(self, seeded):
        orders = get_orders_by_email("MEGAN.Bowen@Contoso.com")
        assert [o["id"] for o in orders] == ["ORD-1001", "ORD-1003"]

    def test_orders_by_unknown_email(self, seeded):
        assert get_orders_by_email("nobody@contoso.com") == []

    def test_tracking_detail(self, seeded):
        tracking = get_tracking("ORD-1001")
        assert tracking["order_id"] == "ORD-1001"
        assert tracking["status"] == "shipped"
        assert tracking["tracking_number"] == "TRK-4829173"
        assert [e["status"] for e in tracking["events"]] == ["pending", "processing", "shipped"]

    def test_tracking_without_number(self, seeded):
        assert get_tracking("ORD-1003")["tracking_number"] is None

    def test_tracking_follows_advances(self, seeded):
        current_domain.process(AdvanceOrder(order_id="ORD-1003"), asynchronous=False)
        tracking = get_tracking("ORD-1003")
        assert tracking["status"] == "shipped"
        assert tracking["events"][-1]["location"] == "Redmond WA"
        assert tracking["tracking_number"].startswith("TRK-")


class TestStockQueries:
    def test_stock_status(self, seeded):
        status = check_stock_status("SP10-004")
        assert status == {
            "sku": "SP10-004",
            "name": "Surface Pro 10",
            "stock": 4,
            "is_in_stock": True,
            "is_low_stock": True,
            "price": 1499.99,
        }

    def test_stock_status_out_of_stock(self, seeded):
        status = check_stock_status("SG4-003")
        assert status["is_in_stock"] is False
        assert status["is_low_stock"] is False

    def test_stock_status_unknown(self, seeded):
        with pytest.raises(ObjectNotFoundError):
            check_stock_status("NOPE-000")

    def test_low_stock_alert(self, seeded):
        alert = low_stock_alert()
        assert {p["sku"] for p in alert["low_stock"]} == {"SP10-004", "SH3-006"}
        assert alert["out_of_stock"] == [{"sku": "SG4-003", "name": "Surface Go 4"}]
        assert alert["alert_needed"] is True

    def test_no_alert_for_empty_catalog(self):
        assert low_stock_alert() == {"low_stock": [], "out_of_stock": [], "alert_needed": False}

    def test_products_listing(self, seeded):
        products = get_products()
        assert len(products) == 8
        assert {"sku", "name", "price", "stock", "category", "is_in_stock", "is_low_stock"} <= set(products[0])
