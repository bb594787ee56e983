"""Sends the order confirmation once an order has been committed."""

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notifications.order_confirmation import notify_order_confirmed
from storefront.order.events import OrderPlaced
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Order)
class OrderConfirmationEventHandler:
    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        if not event.customer_email:
            logger.info("order_confirmation_skipped", order_id=str(event.order_id), reason="no email")
            return

        # Delivery problems never undo the order
        try:
            notify_order_confirmed(event.customer_email, str(event.order_id), event.total_amount)
        except Exception as exc:
            logger.error("order_confirmation_error", order_id=str(event.order_id), error=str(exc))
