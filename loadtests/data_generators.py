"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names expected by the storefront API's Pydantic
request schemas. Product lines draw from the seeded Contoso catalog.
"""

import random
import uuid

from faker import Faker

fake = Faker()

# Seed catalog entries with enough stock to survive a load run for a while
CATALOG = [
    {"sku": "SL5-001", "name": "Surface Laptop 5", "price": 1299.99},
    {"sku": "SLS-002", "name": "Surface Laptop Studio 2", "price": 1999.99},
    {"sku": "SE2-005", "name": "Surface Earbuds", "price": 199.99},
    {"sku": "XSS-007", "name": "Xbox Series S", "price": 299.99},
    {"sku": "XSX-008", "name": "Xbox Series X", "price": 499.99},
]

SEED_ORDER_IDS = ["ORD-1001", "ORD-1002", "ORD-1003"]

MANUAL_STATUSES = ["processing", "shipped", "refunded"]


def customer_email(name: str) -> str:
    """Unique, lower-case email derived from the customer's name."""
    local = ".".join(name.lower().split())[:30]
    return f"{local}.{uuid.uuid4().hex[:4]}@contoso.com"


def order_item_data(quantity: int | None = None) -> dict:
    product = random.choice(CATALOG)
    return {
        **product,
        "quantity": quantity or 1,
        "image": f"/images/{product['sku'].lower()}.png",
    }


def order_data(item_count: int | None = None) -> dict:
    name = fake.name()
    count = item_count or random.randint(1, 2)
    return {
        "customer_name": name,
        "email": customer_email(name),
        "items": [order_item_data() for _ in range(count)],
    }


def status_data() -> dict:
    return {
        "status": random.choice(MANUAL_STATUSES),
        "location": fake.city(),
        "description": fake.sentence(nb_words=5),
    }


def discount_data() -> dict:
    return {"percentage": random.choice([10, 15, 20, 25])}


def chat_message() -> str:
    order_id = random.choice(SEED_ORDER_IDS)
    return random.choice(
        [
            f"Track {order_id}",
            f"Where is my order {order_id}?",
            f"I want a refund for {order_id}",
            f"I need a replacement for {order_id}",
        ]
    )
