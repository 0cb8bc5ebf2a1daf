"""Stock queries — catalog listing, per-SKU stock status and low-stock alerts."""

from storefront.catalog.product import LOW_STOCK_THRESHOLD, Product
from storefront.catalog.stock import get_product, list_products, low_stock_products, out_of_stock_products


def product_snapshot(product: Product) -> dict:
    return {
        "sku": product.sku,
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "stock": product.stock,
        "category": product.category,
        "image": product.image,
        "is_in_stock": product.is_in_stock,
        "is_low_stock": product.is_low_stock,
    }


def get_products() -> list[dict]:
    return [product_snapshot(product) for product in list_products()]


def check_stock_status(sku: str) -> dict:
    """Stock position of one product. Raises ObjectNotFoundError for unknown SKUs."""
    product = get_product(sku)
    return {
        "sku": product.sku,
        "name": product.name,
        "stock": product.stock,
        "is_in_stock": product.is_in_stock,
        "is_low_stock": product.is_low_stock,
        "price": product.price,
    }


def low_stock_alert(threshold: int = LOW_STOCK_THRESHOLD) -> dict:
    low = low_stock_products(threshold)
    out = out_of_stock_products()
    return {
        "low_stock": [{"sku": p.sku, "name": p.name, "stock": p.stock} for p in low],
        "out_of_stock": [{"sku": p.sku, "name": p.name} for p in out],
        "alert_needed": bool(low or out),
    }
