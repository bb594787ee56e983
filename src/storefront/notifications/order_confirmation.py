"""Order confirmation email."""

import structlog

from storefront.notifications import get_email_channel
from storefront.notifications.email_port import DeliveryResult, delivered

logger = structlog.get_logger(__name__)


def notify_order_confirmed(email: str, order_id: str, total: float) -> DeliveryResult:
    subject = f"Order Confirmation - #{order_id}"
    body = (
        "Thank you for your order!\n\n"
        f"Order ID: {order_id}\n"
        f"Total: ${total:.2f}\n\n"
        "We will let you know when your order ships."
    )
    html_body = (
        "<h1>Thank you for your order!</h1>"
        f"<p>Order ID: <strong>{order_id}</strong></p>"
        f"<p>Total: <strong>${total:.2f}</strong></p>"
        "<p>We will let you know when your order ships.</p>"
    )

    result = get_email_channel().send(to=email, subject=subject, body=body, html_body=html_body)
    if not delivered(result):
        logger.error("order_confirmation_failed", order_id=order_id, error=result.get("error"))
    return result
