"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then
from storefront.catalog.product import Product
from storefront.order.order import Order
from storefront.seed import seed_storefront


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the storefront is seeded")
def storefront_seeded():
    seed_storefront()


@given(parsers.cfparse('a catalog product "{sku}" with {stock:d} units in stock'))
def catalog_product(sku, stock):
    current_domain.repository_for(Product).add(
        Product(sku=sku, name=f"Product {sku}", price=100.0, stock=stock, category="BDD")
    )


@given(parsers.cfparse('product "{sku}" is out of stock'))
def product_out_of_stock(sku):
    repo = current_domain.repository_for(Product)
    product = repo.get(sku)
    product.stock = 0
    repo.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('product "{sku}" has {stock:d} units in stock'))
def product_has_stock(sku, stock):
    assert current_domain.repository_for(Product).get(sku).stock == stock


@then(parsers.cfparse('order "{order_id}" has status "{status}"'))
def order_has_status(order_id, status):
    order = current_domain.repository_for(Order).get(order_id)
    assert order.status == status
    assert order.timeline()[-1].status == status
