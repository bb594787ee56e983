"""Configurable fake payment gateway for development and testing.

Simulates a hosted-checkout provider without external calls. Webhook
signatures are checked with stripe-python's verifier against a local secret,
so a payload signed for the fake is signed the way Stripe signs it.
"""

from uuid import uuid4

import stripe

from storefront.payment.gateway.port import (
    CheckoutLineItem,
    CheckoutSession,
    InvalidWebhookSignature,
    PaymentGateway,
    PaymentProviderError,
    WebhookEvent,
)


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, webhook_secret: str = "whsec_test") -> None:
        self.webhook_secret = webhook_secret
        self.should_succeed: bool = True
        self.failure_reason: str = "Provider unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Provider unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "order_id": order_id,
                "line_items": line_items,
                "currency": currency,
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )
        if not self.should_succeed:
            raise PaymentProviderError(self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        return CheckoutSession(url=f"https://checkout.fake.local/pay/{session_id}", session_id=session_id)

    def parse_webhook(self, payload: str, signature: str) -> WebhookEvent:
        try:
            stripe.WebhookSignature.verify_header(
                payload, signature, self.webhook_secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
            )
        except stripe.SignatureVerificationError as exc:
            raise InvalidWebhookSignature("Invalid webhook signature") from exc
        return WebhookEvent.from_payload(payload)
