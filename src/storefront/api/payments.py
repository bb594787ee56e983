"""FastAPI endpoints for hosted checkout and provider webhooks."""

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from storefront.api.dependencies import current_customer_id
from storefront.api.schemas import CheckoutSessionRequest, CheckoutSessionResponse, WebhookReceivedResponse
from storefront.payment.checkout import create_checkout_session
from storefront.payment.gateway.port import InvalidWebhookSignature, PaymentProviderError
from storefront.payment.webhook import handle_webhook

payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/checkout", status_code=201, response_model=CheckoutSessionResponse)
def start_checkout(
    body: CheckoutSessionRequest, customer_id: str = Depends(current_customer_id)
) -> CheckoutSessionResponse:
    try:
        session = create_checkout_session(
            order_id=body.order_id,
            customer_id=customer_id,
            success_url=body.success_url,
            cancel_url=body.cancel_url,
        )
    except PaymentProviderError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return CheckoutSessionResponse(url=session.url, session_id=session.session_id)


@payment_router.post("/webhook", response_model=WebhookReceivedResponse)
async def provider_webhook(request: Request, stripe_signature: str = Header(default="")) -> WebhookReceivedResponse:
    """Receive a provider notification; the raw body is what gets signed."""
    try:
        payload = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Webhook payload must be UTF-8 encoded")
    try:
        handle_webhook(payload, stripe_signature)
    except InvalidWebhookSignature:
        raise HTTPException(status_code=401, detail="Invalid webhook signature")
    return WebhookReceivedResponse()
