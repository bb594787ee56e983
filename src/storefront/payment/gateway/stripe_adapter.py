"""Stripe Checkout adapter built on the stripe-python SDK."""

import stripe
import structlog

from storefront.payment.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    InvalidWebhookSignature,
    PaymentGateway,
    PaymentProviderError,
    WebhookEvent,
)

logger = structlog.get_logger(__name__)


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str, webhook_secret: str | None = None) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                idempotency_key=f"checkout-{order_id}",
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                client_reference_id=order_id,
                metadata={"order_id": order_id},
                line_items=[
                    {
                        "price_data": {
                            "currency": currency,
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
            )
        except stripe.StripeError as exc:
            logger.error("stripe_checkout_failed", order_id=order_id, error=str(exc))
            raise PaymentProviderError("Failed to create checkout session") from exc

        return CheckoutSession(url=session.url, session_id=session.id)

    def parse_webhook(self, payload: str, signature: str) -> WebhookEvent:
        if not self.webhook_secret:
            raise InvalidWebhookSignature("Webhook secret is not configured")
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as exc:
            raise InvalidWebhookSignature("Invalid webhook signature") from exc
        except ValueError as exc:
            raise InvalidWebhookSignature("Webhook payload is not valid JSON") from exc
        return WebhookEvent.from_payload(payload)
