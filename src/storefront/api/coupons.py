"""FastAPI endpoints for coupons."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    ApplyCouponRequest,
    CouponIdResponse,
    CouponQuoteResponse,
    CouponResponse,
    CreateCouponRequest,
    StatusResponse,
    UpdateCouponRequest,
)
from storefront.coupon.coupon import Coupon
from storefront.coupon.management import CreateCoupon, DeleteCoupon, UpdateCoupon
from storefront.coupon.validator import apply_coupon
from storefront.shared.concurrency import dispatch

coupon_router = APIRouter(prefix="/coupons", tags=["coupons"])


@coupon_router.post("", status_code=201, response_model=CouponIdResponse)
async def create_coupon(body: CreateCouponRequest) -> CouponIdResponse:
    command = CreateCoupon(
        code=body.code,
        discount=body.discount,
        is_flat=body.is_flat,
        expiry_date=body.expiry_date,
        usage_limit=body.usage_limit,
        min_total=body.min_total,
    )
    result = dispatch(command)
    return CouponIdResponse(coupon_id=result)


@coupon_router.get("", response_model=list[CouponResponse])
async def list_coupons() -> list[CouponResponse]:
    return [
        CouponResponse(
            coupon_id=str(c.id),
            code=c.code,
            discount=c.discount,
            is_flat=bool(c.is_flat),
            expiry_date=c.expiry_date,
            usage_limit=c.usage_limit,
            used_count=c.used_count or 0,
            min_total=c.min_total or 0.0,
        )
        for c in current_domain.repository_for(Coupon).list_all()
    ]


@coupon_router.post("/apply", response_model=CouponQuoteResponse)
async def preview_coupon(body: ApplyCouponRequest) -> CouponQuoteResponse:
    """Quote a coupon against a cart total; no use is consumed."""
    quote = apply_coupon(body.code, body.total)
    return CouponQuoteResponse(code=quote.code, discount_amount=quote.discount_amount, final_total=quote.final_total)


@coupon_router.put("/{coupon_id}", response_model=StatusResponse)
async def update_coupon(coupon_id: str, body: UpdateCouponRequest) -> StatusResponse:
    command = UpdateCoupon(coupon_id=coupon_id, **body.model_dump())
    dispatch(command)
    return StatusResponse(status="updated")


@coupon_router.delete("/{coupon_id}", response_model=StatusResponse)
async def delete_coupon(coupon_id: str) -> StatusResponse:
    dispatch(DeleteCoupon(coupon_id=coupon_id))
    return StatusResponse(status="deleted")
