"""Seed dataset — the Contoso catalog and three historical orders.

Loaded once at application startup. Seeding is idempotent: records that
already exist are left as they are, so restarting the seed never resets stock
or order progress. Seed orders are historical and do not take stock.
"""

from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalog.product import Product
from storefront.domain import logger
from storefront.order.order import Order

PRODUCTS = [
    {
        "sku": "SL5-001",
        "name": "Surface Laptop 5",
        "description": "13.5-inch touchscreen laptop with 12th Gen Intel Core processor.",
        "price": 1299.99,
        "stock": 15,
        "category": "Laptops",
        "image": "/images/surface-laptop-5.png",
    },
    {
        "sku": "SLS-002",
        "name": "Surface Laptop Studio 2",
        "description": "Convertible laptop with a dynamic woven hinge for creators.",
        "price": 1999.99,
        "stock": 8,
        "category": "Laptops",
        "image": "/images/surface-laptop-studio-2.png",
    },
    {
        "sku": "SG4-003",
        "name": "Surface Go 4",
        "description": "Compact 10.5-inch tablet for work on the move.",
        "price": 579.99,
        "stock": 0,
        "category": "Tablets",
        "image": "/images/surface-go-4.png",
    },
    {
        "sku": "SP10-004",
        "name": "Surface Pro 10",
        "description": "2-in-1 tablet with detachable keyboard and all-day battery.",
        "price": 1499.99,
        "stock": 4,
        "category": "Tablets",
        "image": "/images/surface-pro-10.png",
    },
    {
        "sku": "SE2-005",
        "name": "Surface Earbuds",
        "description": "Wireless earbuds with touch controls and Office integration.",
        "price": 199.99,
        "stock": 25,
        "category": "Audio",
        "image": "/images/surface-earbuds.png",
    },
    {
        "sku": "SH3-006",
        "name": "Surface Headphones 3",
        "description": "Over-ear headphones with adjustable noise cancellation.",
        "price": 249.99,
        "stock": 3,
        "category": "Audio",
        "image": "/images/surface-headphones-3.png",
    },
    {
        "sku": "XSS-007",
        "name": "Xbox Series S",
        "description": "All-digital next-gen console in a compact form factor.",
        "price": 299.99,
        "stock": 20,
        "category": "Gaming",
        "image": "/images/xbox-series-s.png",
    },
    {
        "sku": "XSX-008",
        "name": "Xbox Series X",
        "description": "The fastest, most powerful Xbox with 1TB of storage.",
        "price": 499.99,
        "stock": 12,
        "category": "Gaming",
        "image": "/images/xbox-series-x.png",
    },
]

# order id, customer, email, (sku, quantity) lines, statuses reached after pending, tracking number
ORDERS = [
    (
        "ORD-1001",
        "Megan Bowen",
        "megan.bowen@contoso.com",
        [("SP10-004", 1)],
        ["processing", "shipped"],
        "TRK-4829173",
    ),
    (
        "ORD-1002",
        "Adele Vance",
        "adele.vance@contoso.com",
        [("SL5-001", 1), ("SE2-005", 1)],
        ["processing", "shipped", "out_for_delivery", "delivered"],
        "TRK-5930284",
    ),
    (
        "ORD-1003",
        "Megan Bowen",
        "megan.bowen@contoso.com",
        [("XSX-008", 1)],
        ["processing"],
        None,
    ),
]


def _exists(repo, identifier) -> bool:
    try:
        repo.get(identifier)
    except ObjectNotFoundError:
        return False
    return True


def _seed_order(order_id, customer_name, email, lines, statuses, tracking_number, catalog, placed_at):
    items = [
        {
            "sku": sku,
            "name": catalog[sku]["name"],
            "price": catalog[sku]["price"],
            "quantity": quantity,
            "image": catalog[sku]["image"],
        }
        for sku, quantity in lines
    ]
    order = Order.create(order_id=order_id, customer_name=customer_name, email=email, items_data=items)
    order.tracking_number = tracking_number
    for _ in statuses:
        order.advance()

    # Spread the history out a day per step, ending at the latest status
    for event in order.timeline():
        event.occurred_at = placed_at + timedelta(days=event.sequence - 1)
    order.created_at = placed_at
    order.updated_at = order.timeline()[-1].occurred_at
    return order


def seed_storefront() -> dict:
    """Load seed products and orders that are not present yet."""
    products = current_domain.repository_for(Product)
    orders = current_domain.repository_for(Order)
    catalog = {p["sku"]: p for p in PRODUCTS}

    added_products = 0
    for data in PRODUCTS:
        if not _exists(products, data["sku"]):
            products.add(Product(**data))
            added_products += 1

    added_orders = 0
    now = datetime.now(UTC)
    for index, (order_id, customer_name, email, lines, statuses, tracking_number) in enumerate(ORDERS):
        if _exists(orders, order_id):
            continue
        placed_at = now - timedelta(days=7 - index * 2)
        orders.add(_seed_order(order_id, customer_name, email, lines, statuses, tracking_number, catalog, placed_at))
        added_orders += 1

    logger.info("Storefront seeded", products=added_products, orders=added_orders)
    return {"products": added_products, "orders": added_orders}
