"""Storefront API package."""

from storefront.api.cart import cart_router
from storefront.api.catalog import product_router
from storefront.api.coupons import coupon_router
from storefront.api.orders import order_router
from storefront.api.payments import payment_router
from storefront.api.refunds import refund_router

__all__ = ["product_router", "cart_router", "order_router", "coupon_router", "payment_router", "refund_router"]
