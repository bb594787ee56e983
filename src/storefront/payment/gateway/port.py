"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement so the
hosted-checkout provider can be swapped (FakeGateway for dev/test,
StripeGateway in production) without touching domain code.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass


class PaymentProviderError(Exception):
    """The provider could not be reached or refused the request."""


class InvalidWebhookSignature(Exception):
    """A webhook payload failed signature verification."""


@dataclass(frozen=True)
class CheckoutLineItem:
    name: str
    unit_amount: int  # smallest currency unit
    quantity: int


@dataclass(frozen=True)
class CheckoutSession:
    url: str
    session_id: str


@dataclass(frozen=True)
class WebhookEvent:
    """Normalized view of a provider notification."""

    type: str
    order_id: str | None = None
    transaction_id: str | None = None

    @classmethod
    def from_payload(cls, payload: str) -> "WebhookEvent":
        try:
            body = json.loads(payload)
        except ValueError as exc:
            raise InvalidWebhookSignature("Webhook payload is not valid JSON") from exc

        session = (body.get("data") or {}).get("object") or {}
        metadata = session.get("metadata") or {}
        return cls(
            type=body.get("type", ""),
            order_id=metadata.get("order_id") or metadata.get("orderId"),
            transaction_id=session.get("id"),
        )


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[CheckoutLineItem],
        currency: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Open a hosted checkout session for an order."""
        ...

    @abstractmethod
    def parse_webhook(self, payload: str, signature: str) -> WebhookEvent:
        """Verify a webhook's signature and return the event it carries.

        Raises:
            InvalidWebhookSignature: when the signature does not match.
        """
        ...
