"""Application tests for the seed dataset."""

from protean import current_domain
from storefront.catalog.product import Product
from storefront.order.order import Order
from storefront.seed import ORDERS, PRODUCTS, seed_storefront


class TestSeedStorefront:
    def test_loads_products_and_orders(self):
        assert seed_storefront() == {"products": len(PRODUCTS), "orders": len(ORDERS)}
        assert len(current_domain.repository_for(Product)._dao.query.all().items) == 8
        assert current_domain.repository_for(Order).get("ORD-1003").status == "processing"

    def test_idempotent(self):
        seed_storefront()
        assert seed_storefront() == {"products": 0, "orders": 0}

    def test_reseeding_keeps_changes(self):
        seed_storefront()
        repo = current_domain.repository_for(Product)
        product = repo.get("SL5-001")
        product.stock = 1
        repo.add(product)

        seed_storefront()
        assert repo.get("SL5-001").stock == 1

    def test_seed_orders_do_not_take_stock(self):
        seed_storefront()
        assert current_domain.repository_for(Product).get("SP10-004").stock == 4

    def test_seed_timelines_are_consistent(self):
        seed_storefront()
        for order in current_domain.repository_for(Order)._dao.query.all().items:
            events = order.timeline()
            assert events[0].status == "pending"
            assert events[-1].status == order.status
            assert [e.occurred_at for e in events] == sorted(e.occurred_at for e in events)
