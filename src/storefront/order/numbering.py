"""Identifier generation for orders, tracking numbers and discount codes."""

import random
import re

ORDER_PREFIX = "ORD-"
FIRST_ORDER_NUMBER = 1001

_ORDER_ID = re.compile(r"^ORD-(\d+)$")


def order_number(order_id: str) -> int | None:
    match = _ORDER_ID.match(order_id or "")
    return int(match.group(1)) if match else None


def next_order_id(existing_ids) -> str:
    """One above the highest existing order number, never below ORD-1001."""
    numbers = [n for n in (order_number(str(i)) for i in existing_ids) if n is not None]
    return f"{ORDER_PREFIX}{max(numbers, default=FIRST_ORDER_NUMBER - 1) + 1}"


def generate_tracking_number() -> str:
    return f"TRK-{random.randint(1_000_000, 9_999_999)}"


def generate_replacement_tracking_number() -> str:
    return f"TRK-RPL-{random.randint(1_000_000, 9_999_999)}"


def generate_discount_code(percentage: int) -> str:
    return f"CONTOSO{percentage}-{random.randint(10_000, 99_999)}"
