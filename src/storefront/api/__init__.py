"""Storefront API package."""

from storefront.api.errors import register_error_handlers
from storefront.api.routes import chat_router, order_router, product_router

__all__ = ["order_router", "product_router", "chat_router", "register_error_handlers"]
