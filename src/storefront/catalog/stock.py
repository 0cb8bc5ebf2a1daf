"""Catalog store operations — product lookup, stock checks and reservations.

Stock is only ever taken out through `decrement_stock` or `reserve_items`.
`reserve_items` validates every line before touching any product, so a
multi-line request either decrements all of its products or none of them.
The whole check-and-decrement sequence runs under one process-wide lock.
"""

import threading

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalog.product import LOW_STOCK_THRESHOLD, InsufficientStock, Product
from storefront.domain import logger

_stock_lock = threading.RLock()


def _products():
    return current_domain.repository_for(Product)


def get_product(sku: str) -> Product:
    """Return the product for `sku`, raising ObjectNotFoundError when unknown."""
    return _products().get(sku)


def find_product(sku: str) -> Product | None:
    try:
        return get_product(sku)
    except ObjectNotFoundError:
        return None


def list_products() -> list[Product]:
    return _products()._dao.query.limit(None).all().items


def check_stock(sku: str, quantity: int) -> bool:
    product = find_product(sku)
    return product is not None and product.has_stock(quantity)


def decrement_stock(sku: str, quantity: int) -> bool:
    """Take `quantity` units of `sku` out of stock.

    Returns False, without mutating anything, when the product is unknown or
    cannot cover the quantity.
    """
    with _stock_lock:
        product = find_product(sku)
        if product is None or not product.has_stock(quantity):
            return False
        product.decrement_stock(quantity)
        _products().add(product)
        return True


def reserve_items(lines: list[dict]) -> list[Product]:
    """Decrement stock for every line, all or nothing.

    Each line carries `sku`, `name` and `quantity`. Quantities of lines that
    share a SKU are summed before checking. Raises InsufficientStock for the
    first line that cannot be covered; no product is modified in that case.
    Returns the updated products in line order.
    """
    requested: dict[str, int] = {}
    names: dict[str, str] = {}
    for line in lines:
        quantity = int(line.get("quantity") or 0)
        if quantity < 1:
            raise ValidationError({"quantity": [f"Quantity for {line['sku']} must be at least 1"]})
        requested[line["sku"]] = requested.get(line["sku"], 0) + quantity
        names.setdefault(line["sku"], line.get("name") or line["sku"])

    with _stock_lock:
        products = {}
        for sku, quantity in requested.items():
            product = find_product(sku)
            if product is None:
                raise InsufficientStock(sku, names[sku], 0, quantity)
            if not product.has_stock(quantity):
                raise InsufficientStock(sku, product.name, product.stock, quantity)
            products[sku] = product

        repo = _products()
        for sku, quantity in requested.items():
            products[sku].decrement_stock(quantity)
            repo.add(products[sku])
            logger.debug("Stock decremented", sku=sku, quantity=quantity, remaining=products[sku].stock)

    return list(products.values())


def low_stock_products(threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
    return [p for p in list_products() if 0 < p.stock < threshold]


def out_of_stock_products() -> list[Product]:
    return [p for p in list_products() if p.stock == 0]
