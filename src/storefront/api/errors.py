"""HTTP error mapping for storefront exceptions.

Protean's handlers cover ValidationError (400) and ObjectNotFoundError (404).
Stock shortfalls and bot failures get their own status codes on top.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.assistant.port import AssistantUnavailable
from storefront.catalog.product import InsufficientStock
from storefront.domain import logger


async def insufficient_stock_handler(_request: Request, exc: InsufficientStock) -> JSONResponse:
    return JSONResponse(
        status_code=409,
        content={
            "error": exc.message,
            "sku": exc.sku,
            "name": exc.name,
            "available": exc.available,
            "requested": exc.requested,
        },
    )


async def assistant_unavailable_handler(_request: Request, exc: AssistantUnavailable) -> JSONResponse:
    logger.warning("Assistant request failed", error=str(exc), upstream_status=exc.status_code)
    return JSONResponse(status_code=502, content={"error": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(InsufficientStock, insufficient_stock_handler)
    app.add_exception_handler(AssistantUnavailable, assistant_unavailable_handler)
