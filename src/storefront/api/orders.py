"""FastAPI endpoints for orders and refund requests."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_customer_email, current_customer_id
from storefront.api.schemas import (
    OrderIdResponse,
    OrderItemResponse,
    OrderResponse,
    PlaceOrderRequest,
    RefundIdResponse,
    RefundResponse,
    RequestRefundRequest,
    ShippingAddressSchema,
    StatusResponse,
    UpdateOrderStatusRequest,
)
from storefront.order.commitment import place_order
from storefront.order.lifecycle import CancelOrder, UpdateOrderStatus
from storefront.order.order import Order
from storefront.refund.refund import Refund
from storefront.refund.requests import RequestRefund
from storefront.shared.concurrency import dispatch

order_router = APIRouter(prefix="/orders", tags=["orders"])


def order_response(order: Order) -> OrderResponse:
    address = order.shipping_address
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        status=order.status,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                variant_id=str(item.variant_id) if item.variant_id else None,
                title=item.title,
                sku=item.sku,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in order.items
        ],
        subtotal_amount=order.subtotal_amount,
        discount_amount=order.discount_amount,
        tax_amount=order.tax_amount,
        shipping_amount=order.shipping_amount,
        total_amount=order.total_amount,
        coupon_code=order.coupon_code,
        shipping_address=ShippingAddressSchema(**address.to_dict()) if address else None,
        payment_id=str(order.payment_id) if order.payment_id else None,
        refund_id=str(order.refund_id) if order.refund_id else None,
        created_at=order.created_at,
    )


def refund_response(refund: Refund) -> RefundResponse:
    return RefundResponse(
        refund_id=str(refund.id),
        order_id=str(refund.order_id),
        customer_id=str(refund.customer_id),
        amount=refund.amount,
        reason=refund.reason,
        status=refund.status,
        created_at=refund.created_at,
    )


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def create_order(
    body: PlaceOrderRequest,
    customer_id: str = Depends(current_customer_id),
    customer_email: str | None = Depends(current_customer_email),
) -> OrderIdResponse:
    order_id = place_order(
        customer_id=customer_id,
        customer_email=customer_email,
        items=[item.model_dump() for item in body.items],
        coupon_code=body.coupon_code,
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
    )
    return OrderIdResponse(order_id=order_id)


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(customer_id: str = Depends(current_customer_id)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).for_customer(customer_id)
    return [order_response(order) for order in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> OrderResponse:
    order = current_domain.repository_for(Order).get_for_customer(order_id, customer_id)
    return order_response(order)


@order_router.post("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(order_id: str, customer_id: str = Depends(current_customer_id)) -> StatusResponse:
    dispatch(CancelOrder(order_id=order_id, customer_id=customer_id))
    return StatusResponse(status="cancelled")


@order_router.patch("/{order_id}/status", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    """Staff-only status transition."""
    dispatch(UpdateOrderStatus(order_id=order_id, status=body.status))
    return StatusResponse(status="updated")


@order_router.post("/{order_id}/refund", status_code=201, response_model=RefundIdResponse)
async def request_refund(
    order_id: str, body: RequestRefundRequest, customer_id: str = Depends(current_customer_id)
) -> RefundIdResponse:
    command = RequestRefund(order_id=order_id, customer_id=customer_id, reason=body.reason)
    refund_id = dispatch(command)
    return RefundIdResponse(refund_id=refund_id)


@order_router.get("/{order_id}/refund", response_model=RefundResponse | None)
async def get_refund(order_id: str, customer_id: str = Depends(current_customer_id)) -> RefundResponse | None:
    order = current_domain.repository_for(Order).get_for_customer(order_id, customer_id)
    refund = current_domain.repository_for(Refund).for_order(order.id)
    return refund_response(refund) if refund else None
