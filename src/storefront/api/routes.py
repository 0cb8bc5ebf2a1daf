"""FastAPI routes for the storefront."""

import json

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    ActivitiesResponse,
    ActivityIdResponse,
    AdvanceAllResponse,
    ApplyDiscountRequest,
    ConversationResponse,
    DiscountResponse,
    OrderResponse,
    PlaceOrderRequest,
    ProductResponse,
    ReplacementResponse,
    SendMessageRequest,
    SetOrderStatusRequest,
    StockAlertResponse,
    StockStatusResponse,
    TrackingResponse,
)
from storefront.assistant import get_assistant
from storefront.assistant.port import DEFAULT_USER_ID
from storefront.catalog.product import LOW_STOCK_THRESHOLD, InsufficientStock
from storefront.discount.issuance import ApplyDiscount
from storefront.order.creation import PlaceOrder
from storefront.order.replacement import TriggerReplacement
from storefront.order.simulation import AdvanceAllOrders, AdvanceOrder
from storefront.order.status import SetOrderStatus
from storefront.queries.orders import get_order, get_orders, get_orders_by_email, get_tracking, order_snapshot
from storefront.queries.stock import check_stock_status, get_products, low_stock_alert

# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest) -> dict:
    """Check out a cart. Rejected as a whole when any item is short."""
    command = PlaceOrder(
        customer_name=body.customer_name,
        email=body.email,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    order_id = current_domain.process(command, asynchronous=False)
    return get_order(order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(email: str | None = None) -> list[dict]:
    if email:
        return get_orders_by_email(email)
    return get_orders()


@order_router.post("/advance", response_model=AdvanceAllResponse)
async def advance_all_orders() -> dict:
    """Move every open order one stage along the delivery progression."""
    advanced = current_domain.process(AdvanceAllOrders(), asynchronous=False)
    return {"advanced": len(advanced), "orders": [order_snapshot(order) for order in advanced]}


@order_router.get("/{order_id}", response_model=OrderResponse)
async def read_order(order_id: str) -> dict:
    return get_order(order_id)


@order_router.get("/{order_id}/tracking", response_model=TrackingResponse)
async def read_tracking(order_id: str) -> dict:
    return get_tracking(order_id)


@order_router.put("/{order_id}/status", response_model=OrderResponse)
async def set_order_status(order_id: str, body: SetOrderStatusRequest) -> dict:
    command = SetOrderStatus(
        order_id=order_id,
        status=body.status.value,
        location=body.location,
        description=body.description,
    )
    current_domain.process(command, asynchronous=False)
    return get_order(order_id)


@order_router.put("/{order_id}/advance", response_model=OrderResponse)
async def advance_order(order_id: str) -> dict:
    current_domain.process(AdvanceOrder(order_id=order_id), asynchronous=False)
    return get_order(order_id)


@order_router.post("/{order_id}/discounts", status_code=201, response_model=DiscountResponse)
async def apply_discount(order_id: str, body: ApplyDiscountRequest | None = None) -> dict:
    """Issue a discount code. Unknown order ids still receive a code."""
    percentage = body.percentage if body else ApplyDiscountRequest().percentage
    command = ApplyDiscount(order_id=order_id, percentage=percentage)
    return current_domain.process(command, asynchronous=False)


@order_router.post("/{order_id}/replacement", status_code=201, response_model=ReplacementResponse)
async def trigger_replacement(order_id: str):
    try:
        return current_domain.process(TriggerReplacement(order_id=order_id), asynchronous=False)
    except ObjectNotFoundError:
        return JSONResponse(status_code=404, content={"success": False, "error": "Order not found"})
    except InsufficientStock as exc:
        return JSONResponse(status_code=409, content={"success": False, "error": exc.message})


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[dict]:
    return get_products()


@product_router.get("/stock-alerts", response_model=StockAlertResponse)
async def stock_alerts(threshold: int = Query(default=LOW_STOCK_THRESHOLD, ge=1)) -> dict:
    return low_stock_alert(threshold)


@product_router.get("/{sku}/stock", response_model=StockStatusResponse)
async def stock_status(sku: str) -> dict:
    return check_stock_status(sku)


# ---------------------------------------------------------------------------
# Chat Router
# ---------------------------------------------------------------------------
chat_router = APIRouter(prefix="/chat", tags=["chat"])


@chat_router.post("/conversations", status_code=201, response_model=ConversationResponse)
async def start_conversation() -> dict:
    return get_assistant().start_conversation()


@chat_router.post("/conversations/{conversation_id}/activities", response_model=ActivityIdResponse)
async def send_message(conversation_id: str, body: SendMessageRequest) -> ActivityIdResponse:
    activity_id = get_assistant().send_message(
        conversation_id,
        body.token,
        body.text,
        body.user_id or DEFAULT_USER_ID,
    )
    return ActivityIdResponse(activity_id=activity_id)


@chat_router.get("/conversations/{conversation_id}/activities", response_model=ActivitiesResponse)
async def poll_activities(conversation_id: str, token: str, watermark: str | None = None) -> dict:
    return get_assistant().poll_activities(conversation_id, token, watermark)


@chat_router.post("/tokens", response_model=ConversationResponse)
async def generate_token() -> dict:
    return get_assistant().generate_token()
