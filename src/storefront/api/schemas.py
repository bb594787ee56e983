"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Catalog ---


class AddProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"title": "Canvas Tote", "sku": "TOTE-001", "price": 49.99, "discounted_price": None, "stock": 100}
            ]
        }
    }

    title: str = Field(..., max_length=255)
    sku: str = Field(..., max_length=50)
    price: float = Field(..., ge=0)
    discounted_price: float | None = Field(None, ge=0)
    stock: int = Field(0, ge=0)


class AddVariantRequest(BaseModel):
    sku: str = Field(..., max_length=50)
    size: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)
    price_diff: float = 0.0
    stock: int = Field(0, ge=0)


class ChangePriceRequest(BaseModel):
    price: float = Field(..., ge=0)
    discounted_price: float | None = Field(None, ge=0)


class ReplenishStockRequest(BaseModel):
    quantity: int = Field(..., ge=1)
    variant_id: str | None = None


class VariantResponse(BaseModel):
    variant_id: str
    sku: str
    size: str | None = None
    color: str | None = None
    price_diff: float = 0.0
    stock: int = 0


class ProductResponse(BaseModel):
    product_id: str
    title: str
    sku: str
    price: float
    discounted_price: float | None = None
    unit_price: float
    stock: int
    variants: list[VariantResponse] = []


class ProductIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901"}]}}

    product_id: str


class VariantIdResponse(BaseModel):
    variant_id: str


class StockResponse(BaseModel):
    available: int


# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(1, ge=1)


class UpdateCartQuantityRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class CartLineResponse(BaseModel):
    item_id: str
    product_id: str
    variant_id: str | None = None
    title: str | None = None
    quantity: int
    unit_price: float | None = None
    line_total: float | None = None
    available: bool = True


class CartResponse(BaseModel):
    cart_id: str | None = None
    customer_id: str
    items: list[CartLineResponse] = []
    total: float = 0.0


class ItemIdResponse(BaseModel):
    item_id: str


# --- Orders ---


class ShippingAddressSchema(BaseModel):
    full_name: str | None = Field(None, max_length=255)
    street: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str | None = Field(None, max_length=100)
    postal_code: str = Field(..., max_length=20)
    country: str = Field(..., max_length=100)
    phone: str | None = Field(None, max_length=30)


class OrderLineRequest(BaseModel):
    product_id: str
    variant_id: str | None = None
    quantity: int = Field(..., ge=1)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "b2c3d4e5-f6a7-8901-bcde-f12345678901", "quantity": 2}],
                    "coupon_code": "SAVE10",
                    "shipping_address": {
                        "full_name": "Jane Doe",
                        "street": "1 Main St",
                        "city": "Springfield",
                        "postal_code": "12345",
                        "country": "US",
                    },
                }
            ]
        }
    }

    items: list[OrderLineRequest]
    coupon_code: str | None = Field(None, max_length=50)
    shipping_address: ShippingAddressSchema | None = None


class CheckoutCartRequest(BaseModel):
    coupon_code: str | None = Field(None, max_length=50)
    shipping_address: ShippingAddressSchema | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    variant_id: str | None = None
    title: str
    sku: str
    quantity: int
    unit_price: float


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    items: list[OrderItemResponse]
    subtotal_amount: float
    discount_amount: float
    tax_amount: float
    shipping_amount: float
    total_amount: float
    coupon_code: str | None = None
    shipping_address: ShippingAddressSchema | None = None
    payment_id: str | None = None
    refund_id: str | None = None
    created_at: datetime | None = None


class OrderIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"order_id": "d4e5f6a7-b8c9-0123-def0-234567890123"}]}}

    order_id: str


# --- Coupons ---


class CreateCouponRequest(BaseModel):
    code: str = Field(..., max_length=50)
    discount: float = Field(..., ge=0)
    is_flat: bool = False
    expiry_date: datetime
    usage_limit: int | None = Field(None, ge=1)
    min_total: float = Field(0.0, ge=0)


class UpdateCouponRequest(BaseModel):
    code: str | None = Field(None, max_length=50)
    discount: float | None = Field(None, ge=0)
    is_flat: bool | None = None
    expiry_date: datetime | None = None
    usage_limit: int | None = Field(None, ge=1)
    min_total: float | None = Field(None, ge=0)


class ApplyCouponRequest(BaseModel):
    code: str = Field(..., max_length=50)
    total: float = Field(..., ge=0)


class CouponQuoteResponse(BaseModel):
    code: str
    discount_amount: float
    final_total: float


class CouponResponse(BaseModel):
    coupon_id: str
    code: str
    discount: float
    is_flat: bool
    expiry_date: datetime
    usage_limit: int | None = None
    used_count: int
    min_total: float


class CouponIdResponse(BaseModel):
    coupon_id: str


# --- Payments ---


class CheckoutSessionRequest(BaseModel):
    order_id: str
    success_url: str
    cancel_url: str


class CheckoutSessionResponse(BaseModel):
    url: str
    session_id: str


class WebhookReceivedResponse(BaseModel):
    received: bool = True


# --- Refunds ---


class RequestRefundRequest(BaseModel):
    reason: str | None = None


class UpdateRefundStatusRequest(BaseModel):
    status: str = Field(..., max_length=20)


class RefundResponse(BaseModel):
    refund_id: str
    order_id: str
    customer_id: str
    amount: float
    reason: str | None = None
    status: str
    created_at: datetime | None = None


class RefundIdResponse(BaseModel):
    refund_id: str


class StatusResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "ok"}]}}

    status: str = "ok"
