"""Pydantic API schemas for the storefront.

These are the external API contracts — separate from domain commands.
The API layer translates between these schemas and domain commands.
"""

from pydantic import BaseModel, Field

from storefront.order.order import OrderStatus


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    sku: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image: str | None = None


class PlaceOrderRequest(BaseModel):
    customer_name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    items: list[OrderItemRequest] = Field(min_length=1)


class SetOrderStatusRequest(BaseModel):
    status: OrderStatus
    location: str | None = None
    description: str | None = None


class ApplyDiscountRequest(BaseModel):
    percentage: int = Field(default=20, ge=1, le=100)


class SendMessageRequest(BaseModel):
    token: str
    text: str = Field(min_length=1)
    user_id: str | None = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class OrderItemResponse(BaseModel):
    sku: str
    name: str
    price: float
    quantity: int
    image: str | None = None


class TrackingEventResponse(BaseModel):
    status: str
    timestamp: str
    location: str | None = None
    description: str | None = None


class OrderResponse(BaseModel):
    id: str
    customer_name: str
    email: str
    items: list[OrderItemResponse]
    total: float
    status: str
    created_at: str
    updated_at: str
    tracking_number: str | None = None
    tracking_events: list[TrackingEventResponse]
    discount_code: str | None = None


class TrackingResponse(BaseModel):
    order_id: str
    status: str
    tracking_number: str | None = None
    events: list[TrackingEventResponse]


class AdvanceAllResponse(BaseModel):
    advanced: int
    orders: list[OrderResponse]


class DiscountResponse(BaseModel):
    code: str
    percentage: int
    order_id: str


class LowStockAlertItem(BaseModel):
    sku: str
    name: str
    remaining_stock: int


class ReplacementResponse(BaseModel):
    success: bool
    original_order_id: str
    new_order_id: str
    tracking_number: str
    low_stock_alerts: list[LowStockAlertItem]


class ProductResponse(BaseModel):
    sku: str
    name: str
    description: str | None = None
    price: float
    stock: int
    category: str | None = None
    image: str | None = None
    is_in_stock: bool
    is_low_stock: bool


class StockStatusResponse(BaseModel):
    sku: str
    name: str
    stock: int
    is_in_stock: bool
    is_low_stock: bool
    price: float


class LowStockEntry(BaseModel):
    sku: str
    name: str
    stock: int


class OutOfStockEntry(BaseModel):
    sku: str
    name: str


class StockAlertResponse(BaseModel):
    low_stock: list[LowStockEntry]
    out_of_stock: list[OutOfStockEntry]
    alert_needed: bool


class ConversationResponse(BaseModel):
    conversation_id: str | None = None
    token: str | None = None
    expires_in: int | None = None


class ActivityIdResponse(BaseModel):
    activity_id: str | None = None


class ActivitiesResponse(BaseModel):
    activities: list[dict]
    watermark: str | None = None
