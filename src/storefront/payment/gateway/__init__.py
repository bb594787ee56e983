"""Payment gateway factory.

Provides get_gateway() / set_gateway() to swap implementations:
- FakeGateway for development and testing
- StripeGateway when STRIPE_SECRET_KEY is configured
"""

import os

from storefront.payment.gateway.fake_adapter import FakeGateway
from storefront.payment.gateway.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway."""
    global _current_gateway
    if _current_gateway is None:
        api_key = os.environ.get("STRIPE_SECRET_KEY")
        if api_key:
            from storefront.payment.gateway.stripe_adapter import StripeGateway

            _current_gateway = StripeGateway(api_key, webhook_secret=os.environ.get("STRIPE_WEBHOOK_SECRET"))
        else:
            _current_gateway = FakeGateway(webhook_secret=os.environ.get("PAYMENT_WEBHOOK_SECRET", "whsec_test"))
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
