"""Inbound provider notifications."""

import structlog

from storefront.payment.gateway import get_gateway
from storefront.payment.gateway.port import WebhookEvent
from storefront.payment.reconciliation import verify_payment

logger = structlog.get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


def handle_webhook(payload: str, signature: str) -> WebhookEvent:
    """Verify a notification and reconcile completed checkouts.

    Raises ``InvalidWebhookSignature`` before anything is read from the
    payload when the signature does not match.
    """
    event = get_gateway().parse_webhook(payload, signature)

    if event.type != CHECKOUT_COMPLETED:
        logger.info("webhook_ignored", event_type=event.type)
        return event

    if not event.order_id:
        logger.warning("webhook_without_order", event_type=event.type, transaction_id=event.transaction_id)
        return event

    payment = verify_payment(event.order_id, event.transaction_id)
    logger.info("webhook_reconciled", order_id=event.order_id, payment_id=str(payment.id))
    return event
