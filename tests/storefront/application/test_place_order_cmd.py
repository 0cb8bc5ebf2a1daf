"""Application tests for order placement via domain.process()."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.catalog.product import InsufficientStock, Product
from storefront.order.creation import PlaceOrder
from storefront.order.order import Order


def _place(items, customer_name="Megan Bowen", email="megan.bowen@contoso.com"):
    return current_domain.process(
        PlaceOrder(customer_name=customer_name, email=email, items=json.dumps(items)),
        asynchronous=False,
    )


def _line(sku, quantity=1, price=10.0):
    return {"sku": sku, "name": f"Product {sku}", "price": price, "quantity": quantity, "image": f"/img/{sku}.png"}


def _stock(sku):
    return current_domain.repository_for(Product).get(sku).stock


class TestPlaceOrder:
    def test_returns_order_id(self, make_product):
        make_product("SKU-A", stock=5)
        assert _place([_line("SKU-A")]) == "ORD-1001"

    def test_follows_seed_orders(self, seeded):
        assert _place([_line("SL5-001", price=1299.99)]) == "ORD-1004"

    def test_ids_increase(self, make_product):
        make_product("SKU-A", stock=5)
        first = _place([_line("SKU-A")])
        second = _place([_line("SKU-A")])
        assert (first, second) == ("ORD-1001", "ORD-1002")

    def test_persists_pending_order(self, make_product):
        make_product("SKU-A", stock=5)
        make_product("SKU-B", stock=5)
        order_id = _place([_line("SKU-A", 2, 10.0), _line("SKU-B", 1, 5.5)])

        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == "pending"
        assert order.total == pytest.approx(25.5)
        assert len(order.items) == 2
        assert [e.status for e in order.timeline()] == ["pending"]

    def test_decrements_stock(self, make_product):
        make_product("SKU-A", stock=5)
        _place([_line("SKU-A", 3)])
        assert _stock("SKU-A") == 2

    def test_insufficient_stock_rejects_whole_order(self, make_product):
        make_product("SKU-A", stock=5)
        make_product("SKU-B", stock=0)
        with pytest.raises(InsufficientStock) as exc:
            _place([_line("SKU-A", 1), _line("SKU-B", 1)])
        assert exc.value.sku == "SKU-B"
        assert _stock("SKU-A") == 5
        assert _stock("SKU-B") == 0
        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError):
            _place([])

    def test_customer_name_required(self, make_product):
        make_product("SKU-A", stock=5)
        with pytest.raises(ValidationError):
            current_domain.process(
                PlaceOrder(email="x@contoso.com", items=json.dumps([_line("SKU-A")])),
                asynchronous=False,
            )

    def test_item_snapshot_is_independent_of_product(self, make_product):
        make_product("SKU-A", stock=5, price=10.0)
        order_id = _place([_line("SKU-A", 1, 10.0)])

        repo = current_domain.repository_for(Product)
        product = repo.get("SKU-A")
        product.price = 99.0
        repo.add(product)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.items[0].price == 10.0
