"""FastAPI endpoints for staff refund review."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from storefront.api.orders import refund_response
from storefront.api.schemas import RefundResponse, StatusResponse, UpdateRefundStatusRequest
from storefront.refund.refund import Refund
from storefront.refund.requests import UpdateRefundStatus
from storefront.shared.concurrency import dispatch

refund_router = APIRouter(prefix="/refunds", tags=["refunds"])


@refund_router.get("", response_model=list[RefundResponse])
async def list_refunds() -> list[RefundResponse]:
    return [refund_response(refund) for refund in current_domain.repository_for(Refund).list_all()]


@refund_router.patch("/{refund_id}/status", response_model=StatusResponse)
async def update_refund_status(refund_id: str, body: UpdateRefundStatusRequest) -> StatusResponse:
    dispatch(UpdateRefundStatus(refund_id=refund_id, status=body.status))
    return StatusResponse(status="updated")
