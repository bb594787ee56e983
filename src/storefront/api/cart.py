"""FastAPI endpoints for the customer's shopping cart."""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_customer_email, current_customer_id
from storefront.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CheckoutCartRequest,
    ItemIdResponse,
    OrderIdResponse,
    StatusResponse,
    UpdateCartQuantityRequest,
)
from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, ClearCart, OpenCart, RemoveFromCart, UpdateCartQuantity
from storefront.cart.view import describe_cart
from storefront.order.commitment import place_order
from storefront.shared.concurrency import dispatch

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(customer_id: str = Depends(current_customer_id)) -> CartResponse:
    dispatch(OpenCart(customer_id=customer_id))
    return CartResponse(**describe_cart(customer_id))


@cart_router.post("/items", status_code=201, response_model=ItemIdResponse)
async def add_to_cart(body: AddToCartRequest, customer_id: str = Depends(current_customer_id)) -> ItemIdResponse:
    command = AddToCart(
        customer_id=customer_id,
        product_id=body.product_id,
        variant_id=body.variant_id,
        quantity=body.quantity,
    )
    item_id = dispatch(command)
    return ItemIdResponse(item_id=item_id)


@cart_router.put("/items/{item_id}", response_model=StatusResponse)
async def update_quantity(
    item_id: str, body: UpdateCartQuantityRequest, customer_id: str = Depends(current_customer_id)
) -> StatusResponse:
    command = UpdateCartQuantity(customer_id=customer_id, item_id=item_id, quantity=body.quantity)
    dispatch(command)
    return StatusResponse()


@cart_router.delete("/items/{item_id}", response_model=StatusResponse)
async def remove_item(item_id: str, customer_id: str = Depends(current_customer_id)) -> StatusResponse:
    dispatch(RemoveFromCart(customer_id=customer_id, item_id=item_id))
    return StatusResponse(status="removed")


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(customer_id: str = Depends(current_customer_id)) -> StatusResponse:
    dispatch(ClearCart(customer_id=customer_id))
    return StatusResponse(status="cleared")


@cart_router.post("/checkout", status_code=201, response_model=OrderIdResponse)
async def checkout_cart(
    body: CheckoutCartRequest,
    customer_id: str = Depends(current_customer_id),
    customer_email: str | None = Depends(current_customer_email),
) -> OrderIdResponse:
    """Place an order for everything currently in the cart."""
    cart = current_domain.repository_for(ShoppingCart).for_customer(customer_id)
    if cart is None or not cart.items:
        raise ValidationError({"cart": ["Cart is empty"]})

    order_id = place_order(
        customer_id=customer_id,
        customer_email=customer_email,
        items=[
            {
                "product_id": str(item.product_id),
                "variant_id": str(item.variant_id) if item.variant_id else None,
                "quantity": item.quantity,
            }
            for item in cart.items
        ],
        coupon_code=body.coupon_code,
        shipping_address=body.shipping_address.model_dump() if body.shipping_address else None,
    )
    return OrderIdResponse(order_id=order_id)
