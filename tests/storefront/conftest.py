import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        # Every test starts from empty stores
        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture(autouse=True)
def _assistant():
    from storefront.assistant import reset_assistant

    reset_assistant()
    yield
    reset_assistant()


@pytest.fixture()
def seeded():
    """Load the seed catalog and orders ORD-1001..ORD-1003."""
    from storefront.seed import seed_storefront

    return seed_storefront()


@pytest.fixture()
def make_product():
    """Factory adding a product with the given stock to the catalog."""
    from storefront.catalog.product import Product

    def _make(sku="SKU-001", stock=10, price=10.0, name=None):
        product = Product(sku=sku, name=name or f"Product {sku}", price=price, stock=stock, category="Test")
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture(autouse=True)
def _log_context():
    from storefront.utils.logging import clear_context

    clear_context()
    yield
    clear_context()
